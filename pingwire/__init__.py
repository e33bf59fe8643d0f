"""
pingwire - HTTP-triggered Telegram notifier
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pingwire")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
__logo__ = "📡"
