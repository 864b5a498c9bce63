"""
Display metadata for the UI layer.

Plain lookup tables from category to icon, color and copy. The core
never reads these; they exist so every screen renders a category the
same way without switching on the enum itself.
"""

from typing import NamedTuple

from mocha.models.ledger import GoalCategory, JarCategory


class JarDisplay(NamedTuple):
    icon: str
    color: str
    description: str


class GoalDisplay(NamedTuple):
    timeframe: str
    color: str


JAR_CATEGORY_DISPLAY: dict[JarCategory, JarDisplay] = {
    JarCategory.ESSENTIALS: JarDisplay("cart.fill", "yellow", "Necessary everyday spending."),
    JarCategory.SAVINGS: JarDisplay("banknote.fill", "green", "Money you put aside for future."),
    JarCategory.FUN: JarDisplay("gamecontroller.fill", "pink", "Leisure and entertainment."),
    JarCategory.BILLS: JarDisplay("doc.text.fill", "red", "Monthly recurring expenses."),
    JarCategory.INVESTMENTS: JarDisplay("chart.bar.fill", "blue", "Funds for growth and wealth."),
    JarCategory.EMERGENCY: JarDisplay("exclamationmark.triangle.fill", "orange", "Funds for unexpected expenses."),
    JarCategory.GENERAL: JarDisplay("cup.and.saucer.fill", "brown", "Everything else."),
}

GOAL_CATEGORY_DISPLAY: dict[GoalCategory, GoalDisplay] = {
    GoalCategory.SHORT_TERM: GoalDisplay("Short Term", "green"),
    GoalCategory.MEDIUM_TERM: GoalDisplay("Medium Term", "orange"),
    GoalCategory.LONG_TERM: GoalDisplay("Long Term", "blue"),
}


def jar_display(category: JarCategory) -> JarDisplay:
    return JAR_CATEGORY_DISPLAY[JarCategory(category)]


def goal_display(category: GoalCategory) -> GoalDisplay:
    return GOAL_CATEGORY_DISPLAY[GoalCategory(category)]
