"""Default catalogs shipped with the module editors.

The editing core never depends on these values beyond "element 0 is the
fallback"; hosts may pass their own ordered sequences instead. They are kept
here so the CLI and the item factories have sensible defaults.
"""

from __future__ import annotations

from typing import Final

PRESET_COLORS: Final[tuple[str, ...]] = (
    "#10b981", "#3b82f6", "#8b5cf6", "#ec4899", "#f59e0b",
    "#ef4444", "#06b6d4", "#84cc16", "#6366f1", "#14b8a6",
    "#f97316", "#a855f7", "#0ea5e9", "#22c55e", "#eab308",
)

MODULE_ICONS: Final[tuple[str, ...]] = (
    "Sparkles", "Clock", "Star", "Heart", "Crown", "Award", "Zap",
    "Coffee", "Scissors", "Sun", "Moon", "Music", "Flower2",
    "Camera", "Palette", "Briefcase", "GraduationCap", "Dumbbell",
    "Leaf", "Gem", "Gift", "Smile", "Users", "Target", "ShoppingBag",
    "Package", "Truck", "CreditCard", "Tag", "Percent", "Box",
)

# Guarantee and category pickers fall back to their first entry.
GUARANTEE_ICONS: Final[tuple[str, ...]] = ("Check", "Shield", "Clock", "Star", "Heart", "Award", "Zap", "ThumbsUp")

CATEGORY_ICONS: Final[tuple[str, ...]] = (
    "Grid", "Sparkles", "TrendingUp", "Percent", "Star", "Heart", "Gift",
    "Package", "ShoppingBag", "Tag", "Award", "Zap", "Coffee", "Shirt",
)

BADGE_PRESETS: Final[tuple[dict[str, str], ...]] = (
    {"id": "popular", "label": "⭐ Populaire", "color": "#f59e0b"},
    {"id": "new", "label": "✨ Nouveau", "color": "#3b82f6"},
    {"id": "promo", "label": "🔥 Promo", "color": "#ef4444"},
    {"id": "limited", "label": "⏰ Limité", "color": "#8b5cf6"},
    {"id": "bestseller", "label": "🏆 Best-seller", "color": "#10b981"},
    {"id": "free", "label": "🎁 Offert", "color": "#06b6d4"},
)

DEFAULT_BADGE_COLOR: Final[str] = "#8b5cf6"

DURATION_OPTIONS: Final[tuple[tuple[int, str], ...]] = (
    (15, "15 min"),
    (30, "30 min"),
    (45, "45 min"),
    (60, "1 heure"),
    (90, "1h30"),
    (120, "2 heures"),
    (180, "3 heures"),
    (240, "4 heures"),
)
