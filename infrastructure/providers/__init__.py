from .base import BaseRateSource
from .binance import BinanceP2PSource
from .fawaz import FawazExchangeSource
from .quidax import QuidaxSource

__all__ = ['BaseRateSource', 'BinanceP2PSource', 'FawazExchangeSource', 'QuidaxSource']
