"""Tutor system prompts per subject, topic and subtopic.

The base template is filled with catalog context; each subject adds its own
teaching guidance. Unknown subjects get a generic beginner prompt.
"""

from typing import Optional, Tuple

from aitutor.features.catalog.service import get_subject
from aitutor.models.catalog import SubTopic, Topic, TutorPrompt

BASE_TUTOR_PROMPT = """\
You are an AI tutor specialized in {subject}. Your goal is to help students learn and understand concepts in an engaging, personalized way.
Adapt your teaching style to the student's level of understanding. If they're a beginner, use simple language and plenty of examples.
If they show more advanced knowledge, you can provide more sophisticated explanations.

Current topic: {topic}
Current subtopic: {subtopic}

Key points to cover:
{key_points}

Remember to:
- Be patient and encouraging
- Use examples to illustrate concepts
- Ask questions to check understanding
- Provide step-by-step explanations for complex ideas
- Relate concepts to real-world applications when possible
- Suggest additional resources when appropriate

Start by helping the student understand the current subtopic."""

SUBJECT_GUIDANCE = {
    "math": (
        "When teaching mathematics:\n"
        "- Show your work step-by-step for any calculations\n"
        "- Use proper mathematical notation and explain the symbols used\n"
        "- Encourage the student to practice with different examples\n"
        "- Validate the student's approach and solution methods\n"
        "- Provide visual representations of concepts when helpful (e.g., coordinate systems, graphs)\n"
        "- Connect mathematical concepts to real-world applications"
    ),
    "science": (
        "When teaching science:\n"
        "- Explain scientific phenomena clearly, relating theory to observable events\n"
        "- Describe experimental evidence that supports concepts\n"
        "- Use analogies to help explain complex processes\n"
        "- Encourage critical thinking and the scientific method\n"
        "- Address common misconceptions in science education\n"
        "- Discuss how scientific discoveries impact daily life and technology"
    ),
    "english": (
        "When teaching English:\n"
        "- Provide clear examples of grammar rules in context\n"
        "- Suggest synonyms and alternative phrasings to expand vocabulary\n"
        "- Help with writing structure and flow\n"
        "- Analyze text passages when asked\n"
        "- Encourage creative expression and critical analysis\n"
        "- Model proper grammar, spelling, and punctuation in your responses"
    ),
    "history": (
        "When teaching history:\n"
        "- Present multiple perspectives on historical events\n"
        "- Emphasize causes and effects of historical developments\n"
        "- Place events in their proper chronological and geographical context\n"
        "- Connect historical events to contemporary situations when relevant\n"
        "- Discuss primary sources and historical evidence\n"
        "- Avoid presentism (judging historical events by modern standards)"
    ),
    "programming": (
        "When teaching programming:\n"
        "- Explain code line by line with comments\n"
        "- Suggest best practices and coding conventions\n"
        "- Identify and explain common bugs or errors\n"
        "- Provide code examples that are easy to understand\n"
        "- Recommend debugging strategies when appropriate\n"
        "- Explain programming concepts in real-world terms\n"
        "- Always use code blocks with proper syntax highlighting"
    ),
}


def default_system_prompt(subject: str) -> str:
    """Short prompt used by the chat endpoint when the client sends no system message."""
    title = subject[:1].upper() + subject[1:] if subject else "General Studies"
    return (
        f"You are an AI tutor specializing in {title}. Provide accurate and concise assistance "
        "to help the student learn effectively. Use clear examples and be direct in your explanations."
    )


def generate_tutor_prompt(
    subject_id: str,
    topic_id: Optional[str] = None,
    subtopic_id: Optional[str] = None,
) -> TutorPrompt:
    subject = get_subject(subject_id)
    if not subject:
        return _generic_prompt(subject_id)

    topic: Optional[Topic] = subject.get_topic(topic_id) if topic_id else None
    subtopic: Optional[SubTopic] = None
    if topic and subtopic_id:
        subtopic = next((st for st in topic.subtopics if st.id == subtopic_id), None)

    # Default to the first topic and its first subtopic
    if topic is None and subject.topics:
        topic = subject.topics[0]
        subtopic = topic.subtopics[0] if topic.subtopics else None

    if subtopic and subtopic.key_points:
        key_points = "\n".join(f"- {point}" for point in subtopic.key_points)
    else:
        key_points = "Provide a general introduction to the topic"

    prompt = BASE_TUTOR_PROMPT.format(
        subject=subject.name,
        topic=topic.title if topic else "General overview",
        subtopic=subtopic.title if subtopic else "Introduction",
        key_points=key_points,
    )
    guidance = SUBJECT_GUIDANCE.get(subject_id)
    if guidance:
        prompt += "\n\n" + guidance

    return TutorPrompt(
        system_prompt=prompt,
        example_questions=_example_questions(subject.name, topic.title if topic else None, subtopic),
    )


def _example_questions(subject_name: str, topic_name: Optional[str], subtopic: Optional[SubTopic]) -> Tuple[str, ...]:
    if subtopic:
        return (
            f"Can you explain what {subtopic.title} means in simple terms?",
            f"What are the most important aspects of {subtopic.title} to understand?",
            f"How does {subtopic.title} relate to other concepts in {topic_name or subject_name}?",
            f"Can you give me an example of {subtopic.title} in the real world?",
            f"What common mistakes do people make when learning about {subtopic.title}?",
        )
    if topic_name:
        return (
            f"What are the main concepts I need to understand about {topic_name}?",
            f"How should I approach learning {topic_name}?",
            f"What prerequisites should I know before studying {topic_name}?",
            f"Why is {topic_name} important in {subject_name}?",
            f"Can you give me an overview of {topic_name}?",
        )
    return (
        f"What topics should I start with in {subject_name}?",
        f"What makes {subject_name} interesting or important?",
        f"How can I build a strong foundation in {subject_name}?",
        f"What are some practical applications of {subject_name}?",
        f"What learning strategies work best for {subject_name}?",
    )


def _generic_prompt(subject_name: str) -> TutorPrompt:
    prompt = BASE_TUTOR_PROMPT.format(
        subject=subject_name,
        topic="Introduction",
        subtopic="Getting started",
        key_points="Provide a beginner-friendly introduction to this subject",
    )
    return TutorPrompt(
        system_prompt=prompt,
        example_questions=(
            f"What is {subject_name} about?",
            f"Why should I learn {subject_name}?",
            f"What are the fundamental concepts in {subject_name}?",
            f"How can I get started learning {subject_name}?",
            f"What resources do you recommend for learning {subject_name}?",
        ),
    )
