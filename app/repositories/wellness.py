# app/repositories/wellness.py
import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional

from app.models.all_models import Collection, PackageCategory, PackageStatus, PackageType
from app.repositories.base import BaseRepository, as_list, dump_for_create, dump_for_update, first_present, is_missing
from app.schemas.wellness import WellnessPackage, WellnessPackageCreate, WellnessPackageUpdate

logger = logging.getLogger(__name__)

WELLNESS_DEFAULTS = {
    "name": "Untitled Package",
    "description": "",
    "type": PackageType.BASIC.value,
    "category": PackageCategory.COMPREHENSIVE.value,
    "status": PackageStatus.ACTIVE.value,
    "duration": 0,
    "price": 0,
    "salesCount": 0,
    "rating": 0,
    "popularity": 1,
}

SEARCH_FIELDS = ("name", "description", "features", "target_audience")

LEADING_NUMBER = re.compile(r"^\s*(\d+)")


# months
DURATION_BUCKETS: Dict[str, Callable[[int], bool]] = {
    "short": lambda months: months <= 3,
    "medium": lambda months: 4 <= months <= 6,
    "long": lambda months: months > 6,
}


def duration_predicate(bucket: Optional[str]) -> Optional[Callable[[Any], bool]]:
    """Predicate for the query engine; ``None`` when no bucket is selected."""
    if not bucket:
        return None
    if bucket not in DURATION_BUCKETS:
        raise ValueError(f"Unknown duration bucket: {bucket}")
    test = DURATION_BUCKETS[bucket]
    return lambda package: test(package.duration)


def duration_months(value: Any) -> Optional[int]:
    """Months from an int or a legacy string such as "3 months"; None when unreadable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        match = LEADING_NUMBER.match(value)
        if match:
            return int(match.group(1))
    return None


class WellnessRepository(BaseRepository[WellnessPackage]):
    collection = Collection.WELLNESS_PACKAGES.value
    model = WellnessPackage
    defaults = WELLNESS_DEFAULTS

    def normalize(self, record: Mapping[str, Any]) -> WellnessPackage:
        data = dict(record)
        # older packages carried totalPrice, or were priced per session
        if is_missing(data.get("price")):
            if not is_missing(data.get("totalPrice")):
                data["price"] = data["totalPrice"]
            elif not is_missing(data.get("pricePerSession")):
                data["price"] = (data.get("sessions") or 0) * data["pricePerSession"]
        if is_missing(data.get("discountPercentage")) and not is_missing(data.get("membershipDiscounts")):
            data["discountPercentage"] = data["membershipDiscounts"]
        data["duration"] = duration_months(data.get("duration"))
        data["inclusions"] = first_present(record, "inclusions", "includes")
        for field in ("features", "inclusions", "targetAudience", "recommendedFor"):
            data[field] = [str(item) for item in as_list(data.get(field))]
        if not isinstance(data.get("validityPeriod"), Mapping):
            data.pop("validityPeriod", None)
        return super().normalize(data)

    def list_all(self, status: Optional[str] = None) -> List[WellnessPackage]:
        packages = self.list({"status": status} if status else None)
        return sorted(packages, key=lambda p: p.popularity, reverse=True)

    def create(self, payload: WellnessPackageCreate, doc_id: Optional[str] = None) -> WellnessPackage:
        fields = dump_for_create(payload)
        fields.setdefault("salesCount", 0)
        fields.setdefault("rating", 0)
        package = self._create(fields, doc_id)
        logger.info(f"Created wellness package {package.id} ({package.name})")
        return package

    def update_package(self, package_id: str, payload: WellnessPackageUpdate) -> None:
        self.update(package_id, dump_for_update(payload))
