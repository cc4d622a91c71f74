import uuid
from datetime import datetime


def _generate(prefix: str) -> str:
    return f"{prefix}-{datetime.now().strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:4]}"


def generate_property_id() -> str:
    return _generate("PR")


def generate_payment_id() -> str:
    return _generate("LY")


def generate_expense_id() -> str:
    return _generate("DP")
