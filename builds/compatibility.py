"""Basic compatibility checks for PC builds.

Only structural checks are made: every required slot must be filled and
every component must still point at a catalog product. Socket, memory and
power-budget matching are not modelled.
"""

from dataclasses import dataclass
from typing import List, Optional

from common.choices import CompatibilityStatus, ComponentCategory

from .models import PcBuild

REQUIRED_CATEGORIES = (
    ComponentCategory.CPU,
    ComponentCategory.MOTHERBOARD,
    ComponentCategory.RAM,
    ComponentCategory.PSU,
    ComponentCategory.CASE,
)

SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"


@dataclass(frozen=True)
class CompatibilityIssue:
    component_id: Optional[int]
    issue: str
    severity: str

    def as_dict(self) -> dict:
        return {"component_id": self.component_id, "issue": self.issue, "severity": self.severity}


def check_compatibility(build: PcBuild) -> List[CompatibilityIssue]:
    components = sorted(build.components.all(), key=lambda c: c.id)
    if not components:
        return [CompatibilityIssue(None, "No components found in build", SEVERITY_ERROR)]

    issues = []
    present = {c.category for c in components}
    for category in REQUIRED_CATEGORIES:
        if category not in present:
            issues.append(CompatibilityIssue(None, f"Missing required component: {category.value}", SEVERITY_ERROR))
    for component in components:
        if component.product_id is None:
            message = f"Product for {component.category} is no longer available"
            issues.append(CompatibilityIssue(component.id, message, SEVERITY_WARNING))
    return issues


def compatibility_status(issues: List[CompatibilityIssue]) -> str:
    if any(issue.severity == SEVERITY_ERROR for issue in issues):
        return CompatibilityStatus.INCOMPATIBLE
    return CompatibilityStatus.COMPATIBLE
