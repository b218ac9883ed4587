from cp_lens.utils.dates import ensure_iso_date, timestamp_to_date
from cp_lens.utils.result import Err, Ok, Result, settle_all
from cp_lens.utils.retry import request_with_retry

__all__ = [
    "Err",
    "Ok",
    "Result",
    "ensure_iso_date",
    "request_with_retry",
    "settle_all",
    "timestamp_to_date",
]
