"""Purchase ledger transcribed from procurement records.

Rows are kept in the shape they were recorded in: wheat and palm oil carry a
purchase-order date and a per-kilogram rate in the invoice currency, sugar and
cans carry a ``Mon-YY`` month label with an NGN cost.
"""

from types import MappingProxyType

from ..conversion.profiles import Commodity
from .models import LedgerEntry

# (po_date, rate_per_kg, currency)
_WHEAT_ROWS = (
    ("2025-06-17", 0.384, "USD"),
    ("2025-06-21", 0.395, "USD"),
    ("2025-11-13", 0.396, "USD"),
    ("2025-09-11", 0.396, "USD"),
    ("2025-05-31", 0.400, "USD"),
    ("2025-05-31", 0.400, "USD"),
    ("2025-07-29", 0.400, "USD"),
    ("2025-06-17", 0.404, "USD"),
    ("2025-11-18", 0.405, "USD"),
    ("2025-11-18", 0.405, "USD"),
    ("2025-11-18", 0.405, "USD"),
    ("2025-11-18", 0.405, "USD"),
    ("2025-11-20", 0.405, "USD"),
    ("2025-06-18", 0.410, "USD"),
    ("2025-06-19", 0.410, "USD"),
    ("2025-11-06", 0.410, "USD"),
    ("2025-11-18", 0.410, "USD"),
    ("2025-08-14", 0.418, "USD"),
    ("2025-09-11", 0.418, "USD"),
    ("2025-06-17", 0.420, "USD"),
    ("2025-06-19", 0.420, "USD"),
    ("2025-06-23", 0.420, "USD"),
    ("2025-06-23", 0.420, "USD"),
    ("2025-10-09", 0.420, "USD"),
    ("2025-06-21", 0.426, "USD"),
    ("2025-06-21", 0.426, "USD"),
    ("2025-05-31", 0.540, "USD"),
    ("2025-06-02", 0.540, "USD"),
    ("2025-06-02", 0.540, "USD"),
    ("2025-06-02", 0.540, "USD"),
    ("2025-06-20", 0.540, "USD"),
    ("2025-06-20", 0.540, "USD"),
    ("2025-06-20", 0.540, "USD"),
    ("2025-06-20", 0.540, "USD"),
    ("2025-06-20", 0.540, "USD"),
    ("2025-06-20", 0.540, "USD"),
    ("2025-06-21", 0.540, "USD"),
    ("2025-06-21", 0.540, "USD"),
    ("2025-06-21", 0.540, "USD"),
    ("2025-07-02", 0.540, "USD"),
    ("2025-07-02", 0.540, "USD"),
    ("2025-07-02", 0.540, "USD"),
    ("2025-07-21", 0.540, "USD"),
    ("2025-07-22", 0.540, "USD"),
    ("2025-07-22", 0.540, "USD"),
    ("2025-07-22", 0.540, "USD"),
    ("2025-07-22", 0.540, "USD"),
    ("2025-07-22", 0.540, "USD"),
    ("2025-06-18", 0.577, "USD"),
    ("2025-06-23", 0.620, "USD"),
    ("2025-06-23", 0.620, "USD"),
    ("2025-07-31", 0.620, "USD"),
    ("2025-06-23", 0.620, "USD"),
    ("2025-06-17", 0.650, "USD"),
    ("2025-06-17", 0.650, "USD"),
    ("2025-05-05", 5.480, "GHS"),
    ("2025-01-04", 7.120, "GHS"),
    ("2025-02-18", 7.230, "GHS"),
    ("2025-03-05", 7.280, "GHS"),
    ("2025-04-04", 7.280, "GHS"),
    ("2025-02-06", 7.360, "GHS"),
    ("2025-08-08", 9.190, "GHS"),
    ("2025-07-31", 9.230, "GHS"),
    ("2025-05-27", 9.430, "GHS"),
    ("2025-06-04", 9.430, "GHS"),
    ("2025-06-06", 9.430, "GHS"),
    ("2025-06-06", 9.430, "GHS"),
    ("2025-06-06", 9.430, "GHS"),
    ("2025-06-09", 9.430, "GHS"),
    ("2025-06-19", 9.430, "GHS"),
    ("2025-07-01", 9.430, "GHS"),
    ("2025-06-06", 9.430, "GHS"),
    ("2025-06-13", 9.630, "GHS"),
)

# (po_date, rate_per_kg, currency)
_PALM_OIL_ROWS = (
    ("2025-11-20", 14.016, "GHS"),
    ("2025-06-03", 15.150, "GHS"),
    ("2025-06-11", 15.150, "GHS"),
    ("2025-06-19", 15.230, "GHS"),
    ("2025-07-04", 15.230, "GHS"),
    ("2025-06-26", 15.300, "GHS"),
    ("2025-07-09", 15.440, "GHS"),
    ("2025-07-14", 15.440, "GHS"),
    ("2025-07-17", 15.440, "GHS"),
    ("2025-07-17", 15.440, "GHS"),
    ("2025-07-31", 15.440, "GHS"),
    ("2025-05-27", 15.520, "GHS"),
    ("2025-08-06", 15.600, "GHS"),
    ("2025-08-13", 16.550, "GHS"),
    ("2025-08-18", 16.590, "GHS"),
    ("2025-08-28", 16.930, "GHS"),
    ("2025-10-27", 16.956, "GHS"),
    ("2025-11-05", 17.144, "GHS"),
    ("2025-09-03", 18.000, "GHS"),
    ("2025-01-21", 18.750, "GHS"),
    ("2025-10-14", 18.840, "GHS"),
    ("2025-05-12", 19.290, "GHS"),
    ("2025-09-24", 19.550, "GHS"),
    ("2025-10-01", 19.910, "GHS"),
    ("2025-05-07", 20.838, "GHS"),
    ("2025-01-02", 23.020, "GHS"),
    ("2025-04-30", 23.680, "GHS"),
    ("2025-05-08", 23.680, "GHS"),
    ("2025-04-14", 23.840, "GHS"),
    ("2025-04-11", 23.840, "GHS"),
    ("2025-02-07", 24.270, "GHS"),
    ("2025-02-17", 24.410, "GHS"),
    ("2025-02-25", 24.480, "GHS"),
    ("2025-03-10", 24.480, "GHS"),
    ("2025-03-13", 24.720, "GHS"),
    ("2025-03-24", 24.730, "GHS"),
    ("2025-01-10", 26.150, "GHS"),
    ("2025-01-21", 26.610, "GHS"),
    ("2025-01-27", 26.890, "GHS"),
    ("2025-01-23", 34.540, "GHS"),
)

# (month, cost_ngn_per_kg)
_SUGAR_ROWS = (
    ("Dec-25", 1283.72),
    ("Nov-25", 1283.72),
    ("Nov-25", 1283.72),
    ("Nov-25", 1330.23),
    ("Nov-25", 1330.23),
    ("Oct-25", 1358.14),
    ("Oct-25", 1358.14),
    ("Sep-25", 1362.79),
    ("Sep-25", 1362.79),
    ("Aug-25", 1376.74),
    ("Aug-25", 1376.74),
    ("Jul-25", 1376.74),
    ("Jul-25", 1376.74),
    ("Jun-25", 1395.35),
    ("Jun-25", 1395.35),
    ("May-25", 1423.26),
    ("May-25", 1423.26),
    ("Mar-25", 1432.56),
    ("Mar-25", 1432.56),
    ("Feb-25", 1441.86),
    ("Feb-25", 1441.86),
    ("Jan-25", 1441.86),
    ("Jan-25", 1441.86),
    ("Dec-24", 1460.46),
    ("Nov-24", 1460.46),
    ("Oct-24", 1460.46),
)

# (po_date, rate_usd_per_kg, order_quantity_kg, material)
_CRUDE_PALM_OIL_ROWS = (
    ("2024-10-01", 1.53, 130000.000, "PP_RESIN_FC9413P"),
    ("2024-11-01", 1.44, 520000.000, "PP_RESIN_FC9413P"),
    ("2024-12-01", 1.44, 260000.000, "PP_RESIN_FC9413P"),
    ("2025-01-01", 1.42, 260000.000, "PP_RESIN_FC9413P"),
    ("2025-02-01", 1.38, 260000.000, "PP_RESIN_FC9413P"),
    ("2025-03-01", 1.36, 208000.000, "PP_RESIN_FC9413P"),
    ("2025-04-01", 1.36, 260000.000, "PP_RESIN_FC9413P"),
    ("2025-05-01", 1.27, 208000.000, "PP_RESIN_FC9413P"),
    ("2025-07-01", 1.41, 260000.000, "PP_RESIN_FC9413P"),
    ("2025-08-01", 1.39, 104000.000, "PP_RESIN_FC9413P"),
    ("2025-09-01", 1.33, 442000.000, "Mixed: PP_RESIN_FC9413P & PROPYLENE COPOLYMER FC9413 P/ FC9413 G"),
    ("2025-10-01", 1.33, 130000.000, "PROPYLENE COPOLYMER FC9413 P/ FC9413 G"),
    ("2025-11-01", 1.31, 130000.000, "PROPYLENE COPOLYMER FC9413 P/ FC9413 G"),
    ("2025-12-01", 1.27, 182000.000, "PROPYLENE COPOLYMER FC9413 P/ FC9413 G"),
)

# (month, avg_price_ngn_per_can)
_CAN_ROWS = (
    ("Nov-25", 139.50),
    ("Oct-25", 141.12),
    ("Sep-25", 144.47),
    ("Aug-25", 148.64),
    ("Jul-25", 144.58),
    ("Jun-25", 144.11),
    ("May-25", 144.49),
    ("Apr-25", 142.57),
    ("Mar-25", 155.64),
    ("Feb-25", 146.72),
    ("Jan-25", 150.73),
    ("Dec-24", 143.66),
    ("Nov-24", 147.05),
    ("Oct-24", 147.05),
    ("Sep-24", 145.37),
    ("Aug-24", 143.34),
    ("Jul-24", 146.57),
)


def _build_table() -> dict[Commodity, tuple[LedgerEntry, ...]]:
    return {
        Commodity.WHEAT: tuple(
            LedgerEntry(date, rate, currency=currency) for date, rate, currency in _WHEAT_ROWS
        ),
        Commodity.PALM: tuple(
            LedgerEntry(date, rate, currency=currency) for date, rate, currency in _PALM_OIL_ROWS
        ),
        Commodity.SUGAR: tuple(
            LedgerEntry(month, cost, currency="NGN") for month, cost in _SUGAR_ROWS
        ),
        Commodity.CRUDE_PALM: tuple(
            LedgerEntry(date, rate, currency="USD", quantity=quantity, description=material)
            for date, rate, quantity, material in _CRUDE_PALM_OIL_ROWS
        ),
        Commodity.ALUMINUM: tuple(
            LedgerEntry(month, price, currency="NGN", description="per can")
            for month, price in _CAN_ROWS
        ),
    }


LEDGER_TABLE = MappingProxyType(_build_table())


def ledger_entries(commodity: Commodity | str) -> tuple[LedgerEntry, ...]:
    """Return the recorded purchases for a commodity (empty when none exist)."""
    return LEDGER_TABLE.get(Commodity.parse(commodity), ())


__all__ = ["LEDGER_TABLE", "ledger_entries"]
