UNKNOWN_DATE_LABEL = "Unknown"

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

DEFAULT_GRACE_HOURS = 48
DEFAULT_AT_RISK_HOURS = 24
DEFAULT_TIMEZONE = "UTC"
DEFAULT_PAST_STREAKS_LIMIT = 10
