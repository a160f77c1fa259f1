"""
gladiator/database/enums.py

Enumerations

Defines enumerations used across the platform:
- UserRole: Marketplace roles (professional, client)
- Category: Fixed professional categories
- SortOrder: Directory sort orders
- TransactionStatus: Status of a recorded payment intent
- FeedbackType: Kinds of product feedback
"""

from enum import Enum

# ---------------------------------------------------
# User Role Enumeration
# ---------------------------------------------------


class UserRole(str, Enum):
    """
    Enum representing marketplace roles, stored as the profile's user_type.

    Values:
    - PROFESSIONAL
    - CLIENT
    """

    PROFESSIONAL = "professional"
    CLIENT = "client"


# ---------------------------------------------------
# Professional Category Enumeration
# ---------------------------------------------------


class Category(str, Enum):
    IT = "it"
    MARKETING = "marketing"
    DESIGN = "design"
    WRITING = "writing"
    VIDEO = "video"
    SUPPORT = "support"
    FINANCE = "finance"
    CONSULTING = "consulting"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: dict[Category, str] = {
    Category.IT: "IT & Programming",
    Category.MARKETING: "Marketing",
    Category.DESIGN: "Design",
    Category.WRITING: "Writing",
    Category.VIDEO: "Video & Animation",
    Category.SUPPORT: "Support",
    Category.FINANCE: "Finance",
    Category.CONSULTING: "Consulting",
}

ALL_CATEGORIES = "all"


# ---------------------------------------------------
# Directory Sort Order Enumeration
# ---------------------------------------------------


class SortOrder(str, Enum):
    NEWEST = "newest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    EXPERIENCE = "experience"


# ---------------------------------------------------
# Payment Intent Status Enumeration
# ---------------------------------------------------


class TransactionStatus(str, Enum):
    """
    Status assigned when a payment intent is recorded.

    Values:
    - PENDING: no transaction hash supplied yet
    - CONFIRMING: client supplied an (unverified) transaction hash
    """

    PENDING = "pending"
    CONFIRMING = "confirming"


# ---------------------------------------------------
# Feedback Type Enumeration
# ---------------------------------------------------


class FeedbackType(str, Enum):
    FEATURE = "feature"
    IMPROVEMENT = "improvement"
    BUG = "bug"
    OTHER = "other"
