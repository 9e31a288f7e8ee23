from __future__ import annotations

from rentledger.errors import InvalidMeterReading
from rentledger.models.tariff import TariffSettings, UtilityCharges


def check_meter_progress(room_name: str, meter: str, old: int, new: int) -> int:
    """Return the usage between two readings; meters never run backward."""
    if new < old:
        raise InvalidMeterReading(room_name, meter, old, new)
    return new - old


def calculate_charges(
    old_electricity: int,
    new_electricity: int,
    old_water: int,
    new_water: int,
    rates: TariffSettings,
    rent: int = 0,
    room_name: str = "",
) -> UtilityCharges:
    """Price one pair of meter readings.

    ``total`` is exactly rent + electricity cost + water cost + internet fee
    + trash fee + other fees. Pure; raises InvalidMeterReading when either
    meter went backward.
    """
    electricity_usage = check_meter_progress(room_name, "electricity", old_electricity, new_electricity)
    water_usage = check_meter_progress(room_name, "water", old_water, new_water)

    electricity_cost = electricity_usage * rates.electricity_rate
    water_cost = water_usage * rates.water_rate
    total = rent + electricity_cost + water_cost + rates.internet_fee + rates.trash_fee + rates.other_fees

    return UtilityCharges(
        electricity_usage=electricity_usage,
        electricity_cost=electricity_cost,
        water_usage=water_usage,
        water_cost=water_cost,
        rent=rent,
        internet_fee=rates.internet_fee,
        trash_fee=rates.trash_fee,
        other_fees=rates.other_fees,
        total=total,
    )
