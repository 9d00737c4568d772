from decimal import Decimal
from sqlalchemy import Numeric
from sqlalchemy.types import TypeDecorator


class EquityType(TypeDecorator):
    """
    NUMERIC column that reads back as a decimal string ("0.4", never 0.4).

    PostgreSQL hands back Decimal('0.4'); SQLite hands back a float that
    SQLAlchemy pads to ten places. Trailing zeros and a bare point are trimmed
    so both give the same text ("0.4", "1", "0").
    """
    impl = Numeric
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return Decimal(str(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        text = format(Decimal(value), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
