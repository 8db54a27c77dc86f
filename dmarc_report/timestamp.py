from datetime import datetime, timezone
from typing import Any, Optional

from xsdata.formats.converter import Converter, converter


class EpochTimestamp(datetime):
    """Aware UTC datetime bound from a unix timestamp element."""


def epoch_to_datetime(value: Optional[str]) -> Optional[datetime]:
    """Convert the text of a unix timestamp element to an aware UTC datetime.

    An empty element yields ``None``. Anything that is not an integer raises
    ``ValueError``.
    """
    if value is None:
        return None
    seconds = int(value.strip())
    return EpochTimestamp.fromtimestamp(seconds, tz=timezone.utc)


class EpochTimestampConverter(Converter):
    def deserialize(self, value: Any, **kwargs: Any) -> Any:
        if value is None or not str(value).strip():
            return None
        try:
            return epoch_to_datetime(str(value))
        except (ValueError, OverflowError, OSError):
            # Left as text, the model binding reports it with its element path.
            return value

    def serialize(self, value: Any, **kwargs: Any) -> str:
        return str(int(value.timestamp()))


converter.register_converter(EpochTimestamp, EpochTimestampConverter())
