"""Tunable data for responsibility classification.

Categories, keyword tables, thresholds and recommendation templates live
here so the predicates and the aggregation stay free of magic values.
All keyword matching is case-insensitive substring matching unless a
table says otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

StrategyType = Literal["domain", "layer", "feature"]


@dataclass(frozen=True)
class CategoryRule:
    """One responsibility category.

    ``heuristic`` categories match on naming conventions only and are
    switched off together with ``enable_heuristics``.
    """

    tag: str
    label: str
    confidence: float
    description: str
    evidence: tuple[str, ...]
    strategy: StrategyType
    strategy_description: str
    heuristic: bool = False


# Declaration order is the order predicates run on each node.
CATEGORIES: dict[str, CategoryRule] = {
    rule.tag: rule
    for rule in (
        CategoryRule(
            "ui-rendering",
            "UI Rendering",
            0.9,
            "JSX/React component rendering",
            ("JSX elements", "React component structure"),
            "layer",
            "Extract UI components to separate presentation layer",
        ),
        CategoryRule(
            "ui-interaction",
            "User Interaction Handling",
            0.8,
            "Event handling logic",
            ("Event handlers", "User interaction logic"),
            "feature",
            "Move event handlers to custom hooks or separate handlers",
            heuristic=True,
        ),
        CategoryRule(
            "business-logic",
            "Business Logic",
            0.7,
            "Business rule implementation",
            ("Complex calculations", "Business rules", "Domain logic"),
            "domain",
            "Extract business logic to domain services",
        ),
        CategoryRule(
            "data-access",
            "Data Access",
            0.9,
            "Database or API operations",
            ("Database queries", "API calls", "Data fetching"),
            "layer",
            "Move data access to repository or service layer",
        ),
        CategoryRule(
            "validation",
            "Input Validation",
            0.8,
            "Input validation logic",
            ("Schema validation", "Input checking", "Data validation"),
            "feature",
            "Extract validation to schema validation files",
        ),
        CategoryRule(
            "state-management",
            "State Management",
            0.8,
            "State management operations",
            ("State updates", "Store operations", "Context usage"),
            "feature",
            "Move state logic to custom hooks or stores",
        ),
        CategoryRule(
            "api-communication",
            "API Communication",
            0.9,
            "External API communication",
            ("HTTP requests", "API endpoints", "Network operations"),
            "layer",
            "Extract API calls to service layer",
        ),
        CategoryRule(
            "utility",
            "Utility Functions",
            0.6,
            "Utility function",
            ("Helper functions", "Utility operations"),
            "feature",
            "Move utilities to shared utility modules",
            heuristic=True,
        ),
        CategoryRule(
            "configuration",
            "Configuration",
            0.7,
            "Configuration or constants",
            ("Configuration objects", "Constants", "Settings"),
            "feature",
            "Extract configuration to config files",
            heuristic=True,
        ),
        # Reserved: no predicate produces it yet.
        CategoryRule(
            "testing",
            "Testing Logic",
            0.7,
            "Test scaffolding",
            ("Test helpers",),
            "feature",
            "Move test utilities to test helper files",
        ),
    )
}

# Aggregation
PRESENCE_THRESHOLD = 0.3  # count * average confidence must exceed this
SEPARATION_CONFIDENCE = 0.7  # or more than one indicator
HIGH_EFFORT_INDICATORS = 3
HIGH_SEVERITY_RESPONSIBILITIES = 5
DIVERSITY_STEP = 10
DIVERSITY_BONUS_CAP = 0.2

# ui-interaction: property and method names
HANDLER_PREFIXES = ("on",)
HANDLER_KEYWORDS = ("handle", "click")

# business-logic: more than this many direct branch/loop/switch statements
BRANCH_LIMIT = 1

# data-access
DB_METHODS = (
    "query",
    "find",
    "create",
    "update",
    "delete",
    "save",
    "fetch",
    "select",
    "insert",
    "from",
    "where",
    "eq",
    "single",
)
DB_OBJECTS = ("supabase", "prisma", "db", "database")
DATA_CALLEES = ("supabase", "prisma", "fetch", "axios", "query")
DATA_MODULES = ("supabase", "prisma", "mongoose", "sequelize")
DATA_INITIALIZERS = ("supabase", "prisma", "fetch", "axios")

VALIDATION_METHODS = ("validate", "parse", "safeparse", "check")

# Exact, case-sensitive callee names
STATE_HOOKS = frozenset({"useState", "useReducer", "useContext", "useStore", "useSelector"})

API_OBJECTS = ("fetch", "axios", "http")
# Exact method names
HTTP_VERBS = frozenset({"get", "post", "put", "delete", "patch"})

UTILITY_KEYWORDS = ("format", "parse", "convert", "transform", "helper", "util")

CONFIG_VARIABLE_KEYWORDS = (
    "config",
    "constant",
    "setting",
    "option",
    "default",
    "api_",
    "max_",
    "min_",
)
CONFIG_PROPERTY_KEYWORDS = ("config", "constant", "setting", "option", "default")
CONSTANT_MIN_LENGTH = 3


@dataclass(frozen=True)
class RecommendationTemplate:
    category: str
    priority: int
    description: str
    effort: Literal["low", "medium", "high"]
    benefits: tuple[str, ...]
    risks: tuple[str, ...]
    # Only when some other category is present as well
    needs_company: bool = False


RECOMMENDATIONS: tuple[RecommendationTemplate, ...] = (
    RecommendationTemplate(
        "ui-rendering",
        8,
        "Extract non-UI logic from React component",
        "medium",
        (
            "Improved component reusability",
            "Easier testing of business logic",
            "Better separation of concerns",
        ),
        ("May require prop drilling", "Potential performance impact if not optimized"),
        needs_company=True,
    ),
    RecommendationTemplate(
        "data-access",
        9,
        "Extract data access logic into separate service/repository",
        "medium",
        ("Improved testability", "Better data layer abstraction", "Easier to mock for testing"),
        ("Additional abstraction complexity", "May require dependency injection setup"),
    ),
    RecommendationTemplate(
        "validation",
        6,
        "Move validation logic to dedicated validation module",
        "low",
        (
            "Reusable validation logic",
            "Centralized validation rules",
            "Easier to maintain validation consistency",
        ),
        ("Minimal risk",),
    ),
)

# (categories that must all be present, severity, description)
COMBINATION_ISSUES: tuple[tuple[frozenset[str], str, str], ...] = (
    (
        frozenset({"ui-rendering", "data-access"}),
        "high",
        "UI components should not directly handle data access operations",
    ),
    (
        frozenset({"business-logic", "ui-rendering"}),
        "medium",
        "Business logic mixed with UI rendering logic",
    ),
)
