"""
Pydantic schemas for upstream payloads and normalized snapshot rows.

Schemas:
    payloads: Shapes of upstream list entries and detail records
    snapshots: One row schema per snapshot relation, with field coercion

Validation:
    - A payload missing its identifier fails validation (the item is skipped)
    - A numeric or date field that cannot be coerced becomes None
    - Row schemas forbid unknown fields so they always match their table

Usage:
    from schemas.payloads import CoinRef, CoinDetailRecord
    from schemas.snapshots import CoinDetailRow

Example:
    row = CurrentPriceRow(id="bitcoin", vs_currency="usd", price=50000.5)
    assert row.price == Decimal("50000.5")
"""

__all__ = [
    "payloads",
    "snapshots",
]
