"""
Vessel and activity attributes inferred from free text.

Covers the activity category (productive vs. non-productive time), the
vessel operator and class inferred from the vessel name, and the derived
hourly/daily rate and cost of an event when the upload carries none.
"""

from typing import NamedTuple

from src.core.models import RawRecord

NON_PRODUCTIVE_TERMS = (
    "waiting", "wait", "delay", "downtime", "breakdown", "weather", "standby",
    "hold", "suspended", "rig repair", "equipment failure", "maintenance delay",
)

# (name fragment, operator), first match wins
COMPANY_RULES = (
    ("hos", "Hornbeck Offshore"),
    ("chouest", "Edison Chouest"),
    ("harvey", "Harvey Gulf"),
    ("seacor", "Seacor Marine"),
    ("tidewater", "Tidewater"),
    ("thunder horse", "BP Marine"),
    ("olympic", "Olympic Shipping"),
    ("island", "Island Offshore"),
    ("gulf", "Gulf Offshore"),
    ("storm", "Storm Marine"),
    ("versatile", "Versatile Marine"),
)

VESSEL_TYPE_RULES = (
    ("fsv", "FSV"),
    ("fast", "FSV"),
    ("osv", "OSV"),
    ("ahts", "AHTS"),
    ("psv", "PSV"),
    ("msv", "MSV"),
)

# Length in feet by name fragment
VESSEL_SIZE_RULES = (
    ("thunder horse", 320),
    ("island", 320),
    ("olympic", 320),
    ("highland", 280),
    ("storm", 280),
    ("versatile", 260),
    ("hos iron", 245),
    ("hos achiever", 245),
    ("seacor", 220),
    ("gulf", 190),
)

DEFAULT_SIZE_BY_TYPE = {"FSV": 300, "AHTS": 280, "PSV": 260}
DEFAULT_VESSEL_SIZE = 240


class VesselCosts(NamedTuple):
    hourly_rate: float
    daily_rate: float
    cost_total: float


def _first_match(text: str, rules, default=None):
    for fragment, value in rules:
        if fragment in text:
            return value
    return default


def classify_activity(parent_event: str | None, event: str | None) -> str:
    """
    Productive or Non-Productive, from the event descriptions.
    """
    combined = f"{parent_event or ''} {event or ''}".lower()
    if any(term in combined for term in NON_PRODUCTIVE_TERMS):
        return "Non-Productive"
    return "Productive"


def infer_company(vessel_name: str | None) -> str:
    return _first_match((vessel_name or "").lower(), COMPANY_RULES, "Unknown")


def infer_vessel_type(vessel_name: str | None) -> str:
    return _first_match((vessel_name or "").lower(), VESSEL_TYPE_RULES, "OSV")


def infer_vessel_size(vessel_name: str | None) -> int:
    """Approximate vessel length in feet."""
    size = _first_match((vessel_name or "").lower(), VESSEL_SIZE_RULES)
    if size is not None:
        return size
    return DEFAULT_SIZE_BY_TYPE.get(infer_vessel_type(vessel_name), DEFAULT_VESSEL_SIZE)


def calculate_vessel_costs(vessel_name: str | None, hours: float) -> VesselCosts:
    """
    Estimate vessel rates from size and class.

    Args:
        vessel_name: Vessel name
        hours: Hours charged for the event

    Returns:
        VesselCosts rounded to cents
    """
    size = infer_vessel_size(vessel_name)
    if size > 300:
        hourly = 1500.0
    elif size > 250:
        hourly = 1200.0
    elif size > 200:
        hourly = 1000.0
    else:
        hourly = 800.0

    if infer_vessel_type(vessel_name) == "FSV":
        hourly *= 0.8

    return VesselCosts(
        hourly_rate=round(hourly, 2),
        daily_rate=round(hourly * 24, 2),
        cost_total=round(hours * hourly, 2),
    )


class VesselProfile(NamedTuple):
    activity_category: str
    company: str
    vessel_type: str
    daily_rate: float
    cost_total: float


def build_vessel_profile(record: RawRecord) -> VesselProfile:
    """
    Vessel attributes of a record.

    Uploaded rate and cost values take precedence over derived estimates.
    """
    costs = calculate_vessel_costs(record.vessel_name, record.final_hours)
    daily_rate = record.vessel_daily_rate if record.vessel_daily_rate is not None else costs.daily_rate
    cost_total = record.vessel_cost_total if record.vessel_cost_total is not None else costs.cost_total
    return VesselProfile(
        activity_category=classify_activity(record.parent_event_text, record.event_text),
        company=infer_company(record.vessel_name),
        vessel_type=infer_vessel_type(record.vessel_name),
        daily_rate=daily_rate,
        cost_total=cost_total,
    )
