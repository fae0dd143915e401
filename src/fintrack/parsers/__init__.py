"""Bank SMS parsing."""

from .sms import SmsParser, parse_sms

__all__ = ["SmsParser", "parse_sms"]
