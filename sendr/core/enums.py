"""
Shared enums and constants used across the application.
"""

from enum import Enum


class OrderStatus(str, Enum):
    """Order status values used in both models and schemas"""
    PLACED = "placed"
    ACCEPTED = "accepted"
    PACKED = "packed"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


# Forward-only progression; CANCELLED is reachable from any non-terminal status.
ORDER_STATUS_FLOW = [
    OrderStatus.PLACED,
    OrderStatus.ACCEPTED,
    OrderStatus.PACKED,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
]


class Category(str, Enum):
    FRUITS_VEG = "fruits-veg"
    DAIRY_BAKERY = "dairy-bakery"
    SNACKS = "snacks"
    BEVERAGES = "beverages"
    BREAKFAST = "breakfast"
    PERSONAL_CARE = "personal-care"
    HOUSEHOLD = "household"
    PET_CARE = "pet-care"
    OTHER = "other"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    Category.FRUITS_VEG: "Fruits & Vegetables",
    Category.DAIRY_BAKERY: "Dairy, Bread & Eggs",
    Category.SNACKS: "Snacks & Munchies",
    Category.BEVERAGES: "Cold Drinks & Juices",
    Category.BREAKFAST: "Breakfast & Instant Food",
    Category.PERSONAL_CARE: "Personal Care",
    Category.HOUSEHOLD: "Cleaning Essentials",
    Category.PET_CARE: "Pet Care",
    Category.OTHER: "Other",
}

# Name keywords used when a product carries no (or a different) category id.
CATEGORY_KEYWORDS = {
    Category.FRUITS_VEG: ("tomato", "potato", "banana", "apple", "veg", "vegetable", "fruit"),
    Category.DAIRY_BAKERY: ("milk", "bread", "cheese", "dairy", "paneer", "cream", "egg"),
    Category.SNACKS: ("snack", "chips", "kurkure", "lays", "namkeen", "biscuit"),
    Category.BEVERAGES: ("juice", "cola", "drink", "tea", "coffee", "soda", "energy"),
    Category.BREAKFAST: ("corn", "cereal", "maggi", "instant", "breakfast", "oats"),
    Category.PERSONAL_CARE: ("soap", "shampoo", "cream", "lotion", "toothpaste", "deodorant"),
    Category.HOUSEHOLD: ("detergent", "clean", "floor", "phenyl", "wash", "house"),
    Category.PET_CARE: ("dog", "cat", "pet", "pedigree", "whiskas", "meo"),
    Category.OTHER: (),
}
