"""Utility modules for the alert lifecycle service."""
from utils.logger import setup_logging
from utils.formatters import now_ms, format_timestamp, split_addresses
