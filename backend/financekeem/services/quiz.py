"""
Protection & Alignment Assessment scoring
"""
from typing import Dict, List, Mapping, Optional

PILLARS = ("protection", "alignment", "oversight")
PILLAR_MAX_SCORE = 12  # 4 questions * 3 points

STRONG_MIN_SCORE = 9
MODERATE_MIN_SCORE = 5

WELL_ALIGNED = "Well Aligned"
NEEDS_REVIEW = "In Place, Needs Review"
PARTIALLY_BUILT = "Partially Built"
NOT_YET_PROTECTED = "Not Yet Protected"

PROTECTION_STATES = (WELL_ALIGNED, NEEDS_REVIEW, PARTIALLY_BUILT, NOT_YET_PROTECTED)

STATE_DESCRIPTIONS = {
    WELL_ALIGNED: (
        "Your protection system is mostly coordinated. Continue with regular "
        "oversight to maintain alignment as life changes."
    ),
    NEEDS_REVIEW: (
        "Some protection exists, but alignment and responsibility gaps are present. "
        "A comprehensive review would help identify what needs attention."
    ),
    PARTIALLY_BUILT: (
        "Core pieces exist, but the system is fragmented or outdated. Coordination "
        "between your protection elements would strengthen your overall plan."
    ),
    NOT_YET_PROTECTED: (
        "There are significant gaps in your protection structure. Building a "
        "coordinated system should be a priority."
    ),
}


def _question(question_id: str, pillar: str, text: str, options: List[tuple]) -> dict:
    # options listed best to worst, weighted 3, 2, 1, 0
    return {
        "id": question_id,
        "pillar": pillar,
        "question": text,
        "options": [
            {"value": value, "label": label, "score": 3 - i}
            for i, (value, label) in enumerate(options)
        ],
    }


QUIZ_QUESTIONS = [
    # Protection
    _question("p1", "protection", "Which best describes your current life insurance coverage?", [
        ("intentional", "I have coverage that was intentionally designed around my responsibilities"),
        ("rough", "I have coverage, but it was set up a while ago or based on a rough estimate"),
        ("work", "I have some coverage through work or older policies"),
        ("none", "I don't currently have life insurance"),
    ]),
    _question("p2", "protection", "If something happened to you, how confident are you that your coverage would support your dependents long-term?", [
        ("very", "Very confident, it was sized with dependents and obligations in mind"),
        ("somewhat", "Somewhat confident, but I haven't revisited it recently"),
        ("not_very", "Not very confident, I'm not sure how it was calculated"),
        ("unsure", "I'm unsure or it wouldn't be sufficient"),
    ]),
    _question("p3", "protection", "Which best reflects how your responsibilities were considered when coverage was set up?", [
        ("all", "Dependents, housing, and major obligations were clearly accounted for"),
        ("some", "Some responsibilities were considered, but not all"),
        ("minimal", "Coverage was chosen without fully mapping responsibilities"),
        ("none", "Responsibilities were not factored in"),
    ]),
    _question("p4", "protection", "How intentional are your beneficiary designations on life insurance and key accounts?", [
        ("reviewed", "Fully intentional and recently reviewed"),
        ("old", "Intentional at the time, but not reviewed since"),
        ("unsure", "Set up, but I'm unsure if they still reflect my wishes"),
        ("unknown", "I'm not sure who is listed"),
    ]),
    # Alignment
    _question("a1", "alignment", "Which best describes your estate planning documents?", [
        ("current", "I have completed documents that reflect my current situation"),
        ("outdated", "I have documents, but they may be outdated"),
        ("started", "I started the process but didn't complete it"),
        ("none", "I don't have estate planning documents"),
    ]),
    _question("a2", "alignment", "If decisions had to be made on your behalf, how clear is it who would make them?", [
        ("clear", "Very clear, roles are defined and documented"),
        ("somewhat", "Somewhat clear, but not fully documented"),
        ("informal", "Informally discussed, but not documented"),
        ("unclear", "Not clear"),
    ]),
    _question("a3", "alignment", "If you have dependents, how confident are you that guardianship and control decisions reflect your intent?", [
        ("confident", "Very confident, decisions are documented"),
        ("somewhat", "Somewhat confident, but haven't reviewed recently"),
        ("unsure", "Unsure or not fully addressed"),
        ("na", "Not applicable or not considered"),
    ]),
    _question("a4", "alignment", "Are the priorities, rules, and delegations consistent across all of your estate documents?", [
        ("aligned", "Fully aligned and coordinated"),
        ("mostly", "Mostly aligned, but not reviewed as a system"),
        ("misaligned", "Likely misaligned or handled separately"),
        ("unsure", "I'm not sure"),
    ]),
    # Oversight
    _question("o1", "oversight", "When was the last time your protection plan was fully reviewed?", [
        ("year", "Within the last year"),
        ("2-3years", "Within the last 2-3 years"),
        ("3plus", "More than 3 years ago"),
        ("never", "I don't recall a full review"),
    ]),
    _question("o2", "oversight", "Have major life changes occurred since your plan was last reviewed?", [
        ("no", "No, changes have been addressed"),
        ("pending", "Yes, but some updates are pending"),
        ("not_made", "Yes, and updates haven't been made"),
        ("unsure", "I'm not sure"),
    ]),
    _question("o3", "oversight", "Who is responsible for making sure your plan stays current?", [
        ("advisor", "I work with someone who proactively helps manage updates"),
        ("self", "I try to stay on top of it myself"),
        ("reactive", "I update things only when something major happens"),
        ("none", "No one is clearly responsible"),
    ]),
    _question("o4", "oversight", "Which best describes how your plan is maintained over time?", [
        ("regular", "There is a regular review process"),
        ("occasional", "Reviews happen occasionally"),
        ("reactive", "Reviews are reactive or crisis-driven"),
        ("none", "There is no review process"),
    ]),
]

_WEIGHTS: Dict[str, Dict[str, int]] = {
    q["id"]: {option["value"]: option["score"] for option in q["options"]}
    for q in QUIZ_QUESTIONS
}


def public_questions() -> List[dict]:
    """Questions as shown to respondents, without option weights"""
    return [
        {
            "id": q["id"],
            "pillar": q["pillar"],
            "question": q["question"],
            "options": [{"value": o["value"], "label": o["label"]} for o in q["options"]],
        }
        for q in QUIZ_QUESTIONS
    ]


def pillar_strength(score: int) -> str:
    if score >= STRONG_MIN_SCORE:
        return "strong"
    if score >= MODERATE_MIN_SCORE:
        return "moderate"
    return "weak"


def classify(strengths: Mapping[str, str]) -> str:
    """First matching rule wins; the last one catches everything else"""
    weak_count = sum(1 for s in strengths.values() if s == "weak")
    strong_count = sum(1 for s in strengths.values() if s == "strong")

    if strong_count >= 2 and strengths["oversight"] != "weak":
        return WELL_ALIGNED
    if weak_count == 0:
        return NEEDS_REVIEW
    if weak_count == 1:
        return PARTIALLY_BUILT
    return NOT_YET_PROTECTED


def score(answers: Optional[Mapping[str, str]]) -> dict:
    """
    Score an answer sheet {question_id: option_value}

    Unanswered questions and unknown options add nothing.

    Returns:
        dict: pillar_scores, strengths, protection_state, description
    """
    answers = answers or {}
    pillar_scores = {pillar: 0 for pillar in PILLARS}

    for question in QUIZ_QUESTIONS:
        answer = answers.get(question["id"])
        if answer is None:
            continue
        pillar_scores[question["pillar"]] += _WEIGHTS[question["id"]].get(answer, 0)

    strengths = {pillar: pillar_strength(value) for pillar, value in pillar_scores.items()}
    state = classify(strengths)

    return {
        "pillar_scores": pillar_scores,
        "strengths": strengths,
        "protection_state": state,
        "description": STATE_DESCRIPTIONS[state],
    }
