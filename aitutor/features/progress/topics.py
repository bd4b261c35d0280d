"""
Topic detection in tutor replies and the resulting progress updates.

Detection is a plain lower-cased substring scan: "cell" also matches
"cellular" and "excellent". Callers rely on that behavior, so there is no
word-boundary check.
"""

import logging
from typing import Dict, List, Optional, Sequence

from aitutor.features.catalog.service import find_subtopic, get_subject
from aitutor.features.notifications.service import notify_achievement, notify_topic_completion
from aitutor.features.progress.store import add_completed_topics

logger = logging.getLogger("aitutor")

# Display topic list per subject (dashboard progress charts)
SUBJECT_TOPICS: Dict[str, Sequence[str]] = {
    "math": (
        "Basic Arithmetic", "Algebra", "Geometry", "Trigonometry", "Calculus",
        "Statistics", "Probability", "Linear Algebra", "Discrete Mathematics", "Number Theory",
    ),
    "science": (
        "Physics: Mechanics", "Physics: Electricity", "Chemistry: Elements", "Chemistry: Reactions",
        "Biology: Cells", "Biology: Ecosystems", "Astronomy", "Earth Science", "Scientific Method",
        "Lab Techniques",
    ),
    "english": (
        "Grammar", "Vocabulary", "Reading Comprehension", "Writing Essays", "Literature Analysis",
        "Poetry", "Creative Writing", "Public Speaking", "Research Skills", "Critical Thinking",
    ),
    "history": (
        "Ancient Civilizations", "Middle Ages", "Renaissance", "Industrial Revolution", "World War I",
        "World War II", "Cold War", "American History", "European History", "Asian History",
    ),
    "programming": (
        "Programming Basics", "Data Types & Variables", "Control Structures", "Functions & Methods",
        "Object-Oriented Programming", "Data Structures", "Algorithms", "Web Development",
        "Databases", "Software Engineering",
    ),
}

# topic tag -> keywords, per subject; order is detection order
SUBJECT_KEYWORDS: Dict[str, Dict[str, Sequence[str]]] = {
    "math": {
        "algebra": ("equation", "variable", "polynomial", "quadratic", "linear"),
        "calculus": ("derivative", "integral", "limit", "differential", "rate of change"),
        "geometry": ("shape", "angle", "triangle", "circle", "polygon"),
        "statistics": ("probability", "distribution", "average", "standard deviation", "correlation"),
        "trigonometry": ("sine", "cosine", "tangent", "angle", "radian"),
    },
    "science": {
        "physics": ("force", "energy", "motion", "quantum", "relativity"),
        "chemistry": ("reaction", "element", "molecule", "compound", "atom", "bond"),
        "biology": ("cell", "dna", "evolution", "organism", "protein"),
        "astronomy": ("planet", "star", "galaxy", "solar system", "black hole"),
        "geology": ("rock", "mineral", "plate tectonic", "earthquake", "volcano"),
    },
    "english": {
        "grammar": ("syntax", "tense", "punctuation", "sentence", "clause"),
        "writing": ("essay", "paragraph", "narrative", "descriptive", "persuasive"),
        "literature": ("novel", "poem", "character", "theme", "symbolism"),
        "vocabulary": ("word", "synonym", "antonym", "definition", "connotation"),
        "rhetoric": ("argument", "persuasion", "ethos", "pathos", "logos"),
    },
    "history": {
        "ancient": ("mesopotamia", "egypt", "rome", "greece", "china"),
        "medieval": ("feudal", "castle", "knight", "crusade", "monastery"),
        "renaissance": ("humanism", "art", "reformation", "exploration", "perspective"),
        "modern": ("industrial", "revolution", "war", "democracy", "nation"),
        "world-wars": ("trench", "holocaust", "fascism", "allies", "axis"),
    },
    "programming": {
        "basics": ("variable", "loop", "function", "condition", "array"),
        "data-structures": ("algorithm", "tree", "stack", "queue", "hash"),
        "web-dev": ("html", "css", "javascript", "api", "server"),
        "databases": ("sql", "query", "table", "schema", "join"),
        "machine-learning": ("model", "training", "neural", "dataset", "prediction"),
    },
}

# (threshold, achievement name, message template)
ACHIEVEMENT_THRESHOLDS = (
    (5, "Fast Learner", "You've completed 5 topics in {subject}. Keep up the great work!"),
    (10, "Knowledge Explorer", "You've completed 10 topics in {subject}. You're making excellent progress!"),
    (25, "Master Student", "You've completed 25 topics in {subject}. You're becoming a master!"),
)


def detect_topics(text: str, subject_id: str) -> List[str]:
    """Topic tags whose keywords occur anywhere in the text."""
    lowered = text.lower()
    keywords = SUBJECT_KEYWORDS.get(subject_id, {})
    return [tag for tag, words in keywords.items() if any(word in lowered for word in words)]


def detect_topics_in_message(text: str, subject_id: str, user_id: str) -> List[str]:
    detected = detect_topics(text, subject_id)
    if detected:
        update_completed_topics(user_id, subject_id, detected)
    return detected


def update_completed_topics(user_id: str, subject_id: str, new_topics: Sequence[str]) -> bool:
    """
    Append new topics to the user's progress, then notify for completed
    subtopics and for each achievement threshold crossed by this update.
    """
    result = add_completed_topics(user_id, subject_id, new_topics)
    if result is None:
        return False
    if not result.added:
        return True

    subject = get_subject(subject_id)
    if subject is None:
        logger.info(f"[topics] {subject_id} is not in the catalog, skipping notifications")
        return True

    for topic_id in result.added:
        match = find_subtopic(subject, topic_id)
        if match:
            _, subtopic = match
            notify_topic_completion(user_id, subject.id, subject.name, subtopic.title)

    previous_count = len(result.previous)
    for threshold, name, template in ACHIEVEMENT_THRESHOLDS:
        if previous_count < threshold <= result.total:
            notify_achievement(user_id, name, template.format(subject=subject.name))

    logger.info(
        f"[topics] {user_id} completed {len(result.added)} new topic(s) in {subject_id}",
        extra={"user_id": user_id, "subject_id": subject_id, "event_type": "topics.completed"},
    )
    return True


def safe_detect_topics_in_message(text: str, subject_id: str, user_id: str) -> Optional[List[str]]:
    """Background-task wrapper: failures are logged, never raised to the request."""
    try:
        return detect_topics_in_message(text, subject_id, user_id)
    except Exception as e:
        logger.error(f"[topics] error detecting topics for {user_id}/{subject_id}: {e}", exc_info=True)
        return None
