from zoneinfo import ZoneInfo

from rentledger.models.room import RoomStatus

VN_TZ = ZoneInfo("Asia/Ho_Chi_Minh")

MONTHS_EN = {
    1: "January",
    2: "February",
    3: "March",
    4: "April",
    5: "May",
    6: "June",
    7: "July",
    8: "August",
    9: "September",
    10: "October",
    11: "November",
    12: "December",
}

STATUS_LABELS = {
    RoomStatus.AVAILABLE: "Available",
    RoomStatus.OCCUPIED: "Occupied",
    RoomStatus.MAINTENANCE: "Maintenance",
}


def format_period(month: int, year: int) -> str:
    return f"T{month} / {year}"


def format_month(month: int, year: int) -> str:
    return f"{MONTHS_EN.get(month, str(month))}/{year}"
