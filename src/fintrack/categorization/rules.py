"""Deterministic counterparty categorization.

Bank SMS alerts carry no category or MCC, so the category is inferred from
the counterparty name alone by case-insensitive substring matching against
curated keyword lists.

The label set is closed and other systems pattern-match on it: adding a
label is a breaking change.
"""

from __future__ import annotations

import enum


class CategoryLabel(str, enum.Enum):
    """Public spending taxonomy. Values are the persisted labels."""

    FOOD_GROCERY = "FOOD & GROCERY"
    HEALTHCARE = "HEALTHCARE"
    EDUCATION = "EDUCATION"
    RENTS_BILLS = "RENTS & BILLS"
    TRAVEL = "TRAVEL"
    ENTERTAINMENT = "ENTERTAINMENT"
    LOAN_EMI = "LOAN-EMI"
    OTHERS = "OTHERS"


CATEGORIES: set[str] = {label.value for label in CategoryLabel}


# Ordering matters: earlier matches win. Keyword sets overlap across verticals
# (e.g. "amazon" also sells groceries), so the order is the tie-breaker.
_RULES: list[tuple[CategoryLabel, tuple[str, ...]]] = [
    (CategoryLabel.FOOD_GROCERY, ("swiggy", "zomato", "bigbasket", "blinkit", "zepto", "dmart", "grocery")),
    # Shopping has no label of its own
    (CategoryLabel.OTHERS, ("amazon", "flipkart", "myntra", "ajio", "meesho")),
    # Investments / SIPs are transfers to self, not spend
    (CategoryLabel.OTHERS, ("sip", "investment", "mutual fund", "zerodha", "groww")),
    (CategoryLabel.HEALTHCARE, ("apollo", "pharmacy", "pharmeasy", "hospital", "clinic", "practo", "1mg")),
    (CategoryLabel.EDUCATION, ("udemy", "coursera", "byju", "unacademy", "school", "college", "tuition")),
    (CategoryLabel.TRAVEL, ("uber", "ola", "irctc", "makemytrip", "indigo", "redbus", "rapido")),
    (CategoryLabel.ENTERTAINMENT, ("netflix", "hotstar", "spotify", "bookmyshow", "prime video", "jiocinema", "jio cinema")),
    # Broad substrings ("rental", "loan", "jio") are checked after named merchants
    (
        CategoryLabel.RENTS_BILLS,
        ("rental", "nobroker", "electricity", "broadband", "bescom", "airtel", "jio", "water bill", "gas bill"),
    ),
    (CategoryLabel.LOAN_EMI, ("loan", "emi payment", "bajaj finance", "home credit")),
]


def categorize(counterparty: str | None) -> CategoryLabel:
    """Infer a category from the counterparty name.

    Args:
        counterparty: Merchant/person/bank name as extracted from the SMS.

    Returns:
        Exactly one CategoryLabel; OTHERS when absent or unmatched.
    """
    if not counterparty:
        return CategoryLabel.OTHERS

    name = counterparty.lower()
    for label, keywords in _RULES:
        if any(keyword in name for keyword in keywords):
            return label

    return CategoryLabel.OTHERS
