"""
Currency polling table.

Each entry names a fiat currency and the rate sources polled for it. A source
with a cron pattern runs at the pattern's minute cadence; a source without one
gets a randomized interval from SOURCE_INTERVALS. Adding a currency means adding
an entry here.
"""
from dataclasses import dataclass

BINANCE = "binance"
QUIDAX = "quidax"
FAWAZ = "fawaz-exchange-api"


@dataclass(frozen=True)
class SourceInterval:
    """Randomized cadence range for sources registered without a pattern"""
    min_minutes: int
    max_minutes: int
    max_jitter_seconds: int


@dataclass(frozen=True)
class SourceSchedule:
    source_name: str
    pattern: str | None = None


@dataclass(frozen=True)
class CurrencySchedule:
    fiat_code: str
    sources: tuple[SourceSchedule, ...]


SOURCE_INTERVALS: dict[str, SourceInterval] = {
    BINANCE: SourceInterval(min_minutes=3, max_minutes=5, max_jitter_seconds=60),
    QUIDAX: SourceInterval(min_minutes=5, max_minutes=10, max_jitter_seconds=120),
    FAWAZ: SourceInterval(min_minutes=4, max_minutes=10, max_jitter_seconds=120),
}

DEFAULT_SOURCE_INTERVAL = SourceInterval(min_minutes=5, max_minutes=10, max_jitter_seconds=60)


# ISO 4217 codes, upper case.
CURRENCIES: list[CurrencySchedule] = [
    CurrencySchedule("NGN", (SourceSchedule(QUIDAX, "0 */10 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("KES", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("TZS", (SourceSchedule(BINANCE, "30 */5 * * * *"),)),
    CurrencySchedule("UGX", (SourceSchedule(BINANCE, "45 */5 * * * *"),)),
    CurrencySchedule(
        "GHS",
        (
            SourceSchedule(QUIDAX, "30 */5 * * * *"),
            SourceSchedule(BINANCE, "45 */5 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule(
        "ZAR",
        (
            SourceSchedule(BINANCE, "0 1,6,11,16,21,26,31,36,41,46,51,56 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule("MYR", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("IDR", (SourceSchedule(BINANCE, "30 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("PKR", (SourceSchedule(BINANCE, "45 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule(
        "INR",
        (
            SourceSchedule(BINANCE, "15 1,6,11,16,21,26,31,36,41,46,51,56 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule("THB", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("VND", (SourceSchedule(BINANCE, "30 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("PHP", (SourceSchedule(BINANCE, "45 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule(
        "SGD",
        (
            SourceSchedule(BINANCE, "30 1,6,11,16,21,26,31,36,41,46,51,56 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule("SAR", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("HKD", (SourceSchedule(BINANCE, "30 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule(
        "MXN",
        (
            SourceSchedule(BINANCE, "45 */5 * * * *"),
            SourceSchedule(QUIDAX, "45 1,6,11,16,21,26,31,36,41,46,51,56 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule("CZK", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("HUF", (SourceSchedule(BINANCE, "30 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("PLN", (SourceSchedule(BINANCE, "45 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule(
        "COP",
        (
            SourceSchedule(BINANCE, "0 2,7,12,17,22,27,32,37,42,47,52,57 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule("CLP", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule(
        "TRY",
        (
            SourceSchedule(BINANCE, "30 2,7,12,17,22,27,32,37,42,47,52,57 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule(
        "TWD",
        (
            SourceSchedule(BINANCE, "45 2,7,12,17,22,27,32,37,42,47,52,57 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule(
        "RSD",
        (
            SourceSchedule(BINANCE, "0 3,8,13,18,23,28,33,38,43,48,53,58 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule(
        "XOF",
        (
            SourceSchedule(BINANCE, "15 3,8,13,18,23,28,33,38,43,48,53,58 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule(
        "MUR",
        (
            SourceSchedule(BINANCE, "30 3,8,13,18,23,28,33,38,43,48,53,58 * * * *"),
            SourceSchedule(FAWAZ),
        ),
    ),
    CurrencySchedule("BHD", (SourceSchedule(BINANCE, "0 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("JOD", (SourceSchedule(BINANCE, "5 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("OMR", (SourceSchedule(BINANCE, "10 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("KZT", (SourceSchedule(BINANCE, "20 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("RON", (SourceSchedule(BINANCE, "25 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("PAB", (SourceSchedule(BINANCE, "35 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("PEN", (SourceSchedule(BINANCE, "40 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("ALL", (SourceSchedule(BINANCE, "50 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("AZN", (SourceSchedule(BINANCE, "55 */5 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("BAM", (SourceSchedule(BINANCE, "0 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("BDT", (SourceSchedule(BINANCE, "5 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("BGN", (SourceSchedule(BINANCE, "10 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("BOB", (SourceSchedule(BINANCE, "15 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("BSD", (SourceSchedule(BINANCE, "20 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("BWP", (SourceSchedule(BINANCE, "25 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("BZD", (SourceSchedule(BINANCE, "30 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("CAD", (SourceSchedule(BINANCE, "35 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("CDF", (SourceSchedule(BINANCE, "40 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("CHF", (SourceSchedule(BINANCE, "45 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("CRC", (SourceSchedule(BINANCE, "50 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("GBP", (SourceSchedule(BINANCE, "55 */1 * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("DKK", (SourceSchedule(BINANCE, "0 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("ETB", (SourceSchedule(BINANCE, "5 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("EGP", (SourceSchedule(BINANCE, "10 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("GEL", (SourceSchedule(BINANCE, "15 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("GMD", (SourceSchedule(BINANCE, "20 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("GTQ", (SourceSchedule(BINANCE, "25 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("HNL", (SourceSchedule(BINANCE, "30 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("HTG", (SourceSchedule(BINANCE, "35 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("ISK", (SourceSchedule(BINANCE, "40 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("JMD", (SourceSchedule(BINANCE, "45 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("JPY", (SourceSchedule(BINANCE, "50 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("KGS", (SourceSchedule(BINANCE, "55 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("KHR", (SourceSchedule(BINANCE, "2 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("KWD", (SourceSchedule(BINANCE, "7 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("KYD", (SourceSchedule(BINANCE, "12 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("LAK", (SourceSchedule(BINANCE, "17 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("LBP", (SourceSchedule(BINANCE, "22 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("LRD", (SourceSchedule(BINANCE, "27 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("MAD", (SourceSchedule(BINANCE, "32 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("MDL", (SourceSchedule(BINANCE, "37 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("NAD", (SourceSchedule(BINANCE, "42 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("NIO", (SourceSchedule(BINANCE, "47 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("NOK", (SourceSchedule(BINANCE, "52 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("NZD", (SourceSchedule(BINANCE, "57 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("PGK", (SourceSchedule(BINANCE, "3 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("PYG", (SourceSchedule(BINANCE, "8 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("QAR", (SourceSchedule(BINANCE, "13 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("SEK", (SourceSchedule(BINANCE, "18 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("SLE", (SourceSchedule(BINANCE, "23 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("SOS", (SourceSchedule(BINANCE, "28 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("TMT", (SourceSchedule(BINANCE, "33 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("TTD", (SourceSchedule(BINANCE, "38 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("VES", (SourceSchedule(BINANCE, "43 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("XAF", (SourceSchedule(BINANCE, "48 * * * * *"), SourceSchedule(FAWAZ))),
    CurrencySchedule("MWK", (SourceSchedule(FAWAZ), SourceSchedule(BINANCE))),
    CurrencySchedule("ARS", (SourceSchedule(FAWAZ), SourceSchedule(BINANCE))),
    CurrencySchedule("AED", (SourceSchedule(FAWAZ), SourceSchedule(BINANCE))),
    CurrencySchedule("BRL", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("CNY", (SourceSchedule(FAWAZ), SourceSchedule(BINANCE))),
    CurrencySchedule("KRW", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("RUB", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("UAH", (SourceSchedule(FAWAZ), SourceSchedule(BINANCE))),
    CurrencySchedule("UYU", (SourceSchedule(FAWAZ), SourceSchedule(BINANCE))),
    CurrencySchedule("AOA", (SourceSchedule(FAWAZ), SourceSchedule(BINANCE))),
    CurrencySchedule("GNF", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("LSL", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("MZN", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("RWF", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("SDG", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("SZL", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("STN", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("ZMW", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("ZWL", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("IQD", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("IRR", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("SYP", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("TND", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("YER", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("LKR", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("MMK", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("MNT", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("NPR", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("TJS", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("UZS", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("SRD", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("SVC", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("FJD", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("SBD", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("TOP", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("VUV", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("WST", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("MKD", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("ANG", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("AWG", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("BBD", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("BIF", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("BMD", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("BND", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("CUP", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("CVE", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("DJF", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("FKP", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("GIP", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("KMF", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("KPW", (SourceSchedule(FAWAZ),)),
    CurrencySchedule("MOP", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("MRU", (SourceSchedule(BINANCE), SourceSchedule(FAWAZ))),
    CurrencySchedule("SHP", (SourceSchedule(FAWAZ),)),
]
