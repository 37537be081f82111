"""Encoders for exporting exposure records."""

from exposurelog.core.encoding.ndjson import encode_exposures, encode_exposures_async

__all__ = ["encode_exposures", "encode_exposures_async"]
