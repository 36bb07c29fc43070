"""Structured confirmation questions, one per detectable preference category."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PreferenceOption:
    label: str
    value: str
    description: str = ""


@dataclass(frozen=True)
class PreferenceQuestion:
    preference_key: str
    question: str
    options: tuple[PreferenceOption, ...]


PREFERENCE_QUESTIONS: dict[str, PreferenceQuestion] = {
    "housing_status": PreferenceQuestion(
        preference_key="housing_status",
        question="What's your current housing situation?",
        options=(
            PreferenceOption("Own HDB", "own_hdb", "You own an HDB flat"),
            PreferenceOption("Renting", "renting", "You're renting a place"),
            PreferenceOption("With Parents", "with_parents", "Living with family"),
            PreferenceOption("Own Condo/Private", "own_private", "You own private property"),
        ),
    ),
    "employment_type": PreferenceQuestion(
        preference_key="employment_type",
        question="What's your employment type?",
        options=(
            PreferenceOption("Full-time Employee", "full_time"),
            PreferenceOption("Self-employed", "self_employed"),
            PreferenceOption("Freelancer/Gig", "freelancer"),
            PreferenceOption("Student", "student"),
            PreferenceOption("Retired", "retired"),
        ),
    ),
    "budget_preference": PreferenceQuestion(
        preference_key="budget_preference",
        question="What's your budget preference for this?",
        options=(
            PreferenceOption("Budget-friendly", "budget"),
            PreferenceOption("Mid-range", "mid_range"),
            PreferenceOption("Premium", "premium"),
            PreferenceOption("No budget limit", "no_limit"),
        ),
    ),
    "family_status": PreferenceQuestion(
        preference_key="family_status",
        question="What's your family situation?",
        options=(
            PreferenceOption("Single", "single"),
            PreferenceOption("Married, no kids", "married_no_kids"),
            PreferenceOption("Married with kids", "married_with_kids"),
            PreferenceOption("Single parent", "single_parent"),
        ),
    ),
    "citizenship_status": PreferenceQuestion(
        preference_key="citizenship_status",
        question="What's your residency status in Singapore?",
        options=(
            PreferenceOption("Citizen", "citizen"),
            PreferenceOption("PR", "pr"),
            PreferenceOption("EP/SP Holder", "work_pass"),
            PreferenceOption("Student Pass", "student"),
            PreferenceOption("Tourist/Visitor", "visitor"),
        ),
    ),
    "timeline_preference": PreferenceQuestion(
        preference_key="timeline_preference",
        question="What's your timeline for this?",
        options=(
            PreferenceOption("Urgent (< 1 month)", "urgent"),
            PreferenceOption("Soon (1-3 months)", "soon"),
            PreferenceOption("Planning ahead (3-12 months)", "planning"),
            PreferenceOption("Just exploring", "exploring"),
        ),
    ),
}


def question_for(category: str | None) -> PreferenceQuestion | None:
    if not category:
        return None
    return PREFERENCE_QUESTIONS.get(category)
