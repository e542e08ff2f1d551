"""
Maintenance priority levels.
"""

from enum import Enum


class MaintenancePriority(str, Enum):
    """How urgently a piece of equipment needs service."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def weight(self) -> int:
        """Get numeric weight for sorting."""
        weights = {
            self.LOW: 1,
            self.MEDIUM: 2,
            self.HIGH: 3,
            self.CRITICAL: 4
        }
        return weights[self]

    @property
    def label(self) -> str:
        labels = {
            self.LOW: "Low",
            self.MEDIUM: "Medium",
            self.HIGH: "High",
            self.CRITICAL: "Critical"
        }
        return labels[self]
