"""Static curriculum compiled into the application: Subject -> Topic -> SubTopic -> Resource."""

from typing import Tuple

from aitutor.models.catalog import Resource, Subject, SubTopic, Topic

SUBJECTS: Tuple[Subject, ...] = (
    Subject(
        id="math",
        name="Mathematics",
        description="Explore the world of numbers, patterns, and quantitative reasoning",
        color="#4C51BF",
        topics=(
            Topic(
                id="math-basics",
                title="Basic Arithmetic",
                description="Fundamentals of mathematics including operations and number sense",
                difficulty="beginner",
                subtopics=(
                    SubTopic(
                        id="math-basics-operations",
                        title="Basic Operations",
                        description="Addition, subtraction, multiplication, and division",
                        key_points=(
                            "Understanding place value",
                            "Mental math strategies",
                            "Order of operations (PEMDAS)",
                            "Estimation techniques",
                        ),
                        resources=(
                            Resource("Basic Math Operations Tutorial", "video", "Visual guide to understanding basic math operations", "beginner", 15),
                            Resource("Operations Practice Worksheet", "practice", "Practice problems with solutions for basic operations", "beginner", 20),
                        ),
                    ),
                    SubTopic(
                        id="math-basics-fractions",
                        title="Fractions and Decimals",
                        description="Understanding and working with fractions and decimal numbers",
                        key_points=(
                            "Converting between fractions and decimals",
                            "Operations with fractions",
                            "Comparing fractions and decimals",
                            "Applications in real-life",
                        ),
                        resources=(
                            Resource("Fractions Explained Simply", "article", "Clear explanations with visual aids for understanding fractions", "beginner", 10),
                            Resource("Decimal Places Quiz", "quiz", "Test your understanding of decimal places and values", "beginner", 15),
                        ),
                    ),
                ),
            ),
            Topic(
                id="math-algebra",
                title="Algebra",
                description="Using symbols and letters to represent numbers and relationships",
                difficulty="intermediate",
                prerequisite_topic_ids=("math-basics",),
                subtopics=(
                    SubTopic(
                        id="math-algebra-equations",
                        title="Linear Equations",
                        description="Solving equations with one variable",
                        key_points=(
                            "Isolating variables",
                            "Graphing linear equations",
                            "Systems of equations",
                            "Word problems and applications",
                        ),
                        resources=(
                            Resource("Solving Linear Equations", "video", "Step-by-step guide to solving linear equations", "intermediate", 20),
                            Resource("Linear Equation Interactive Explorer", "interactive", "Manipulate linear equations and see results in real-time", "intermediate", 25),
                        ),
                    ),
                    SubTopic(
                        id="math-algebra-expressions",
                        title="Algebraic Expressions",
                        description="Working with variables, terms, and operations",
                        key_points=(
                            "Simplifying expressions",
                            "Combining like terms",
                            "Distributive property",
                            "Factoring expressions",
                        ),
                        resources=(
                            Resource("Algebraic Expressions Demystified", "article", "Clear explanation of algebraic expressions and operations", "intermediate", 15),
                            Resource("Expression Simplification Practice", "practice", "Practice problems for simplifying algebraic expressions", "intermediate", 20),
                        ),
                    ),
                ),
            ),
        ),
    ),
    Subject(
        id="science",
        name="Science",
        description="Discover how our world works through observation and experimentation",
        color="#38A169",
        topics=(
            Topic(
                id="science-physics",
                title="Physics: Mechanics",
                description="Study of motion, forces, energy, and matter",
                difficulty="intermediate",
                subtopics=(
                    SubTopic(
                        id="science-physics-motion",
                        title="Motion and Forces",
                        description="Understanding how objects move and the forces that affect them",
                        key_points=(
                            "Newton's laws of motion",
                            "Velocity and acceleration",
                            "Force diagrams",
                            "Gravity and friction",
                        ),
                        resources=(
                            Resource("Physics in Motion", "video", "Visual demonstrations of motion concepts with examples", "intermediate", 25),
                            Resource("Forces and Motion Simulation", "interactive", "Interactive simulation to explore forces and motion", "intermediate", 30),
                        ),
                    ),
                    SubTopic(
                        id="science-physics-energy",
                        title="Energy and Work",
                        description="Understanding energy, its forms, and transformations",
                        key_points=(
                            "Potential and kinetic energy",
                            "Conservation of energy",
                            "Work and power",
                            "Simple machines",
                        ),
                        resources=(
                            Resource("Energy Transformations", "article", "Comprehensive article on energy types and transformations", "intermediate", 20),
                            Resource("Energy Concepts Quiz", "quiz", "Test your understanding of energy principles", "intermediate", 15),
                        ),
                    ),
                ),
            ),
            Topic(
                id="science-chemistry",
                title="Chemistry: Elements",
                description="Study of matter, its properties, and transformations",
                difficulty="intermediate",
                subtopics=(
                    SubTopic(
                        id="science-chemistry-periodic",
                        title="Periodic Table",
                        description="Understanding elements and their organization",
                        key_points=(
                            "Element properties",
                            "Periodic trends",
                            "Electron configuration",
                            "Groups and periods",
                        ),
                        resources=(
                            Resource("Interactive Periodic Table", "interactive", "Explore the periodic table with detailed element information", "intermediate", 25),
                            Resource("Periodic Trends Explained", "article", "Detailed explanation of periodic trends with examples", "intermediate", 20),
                        ),
                    ),
                ),
            ),
        ),
    ),
    Subject(
        id="english",
        name="English",
        description="Develop language skills through reading, writing, and analysis",
        color="#DD6B20",
        topics=(
            Topic(
                id="english-grammar",
                title="Grammar",
                description="Rules that govern the structure of language",
                difficulty="beginner",
                subtopics=(
                    SubTopic(
                        id="english-grammar-parts",
                        title="Parts of Speech",
                        description="Understanding the different components of language",
                        key_points=(
                            "Nouns, verbs, adjectives, adverbs",
                            "Prepositions and conjunctions",
                            "Pronouns and articles",
                            "Identifying parts of speech in sentences",
                        ),
                        resources=(
                            Resource("Parts of Speech Guide", "article", "Comprehensive guide to parts of speech with examples", "beginner", 15),
                            Resource("Parts of Speech Practice", "practice", "Exercises to identify parts of speech in context", "beginner", 20),
                        ),
                    ),
                    SubTopic(
                        id="english-grammar-sentences",
                        title="Sentence Structure",
                        description="Building effective and grammatically correct sentences",
                        key_points=(
                            "Subject-verb agreement",
                            "Simple, compound, and complex sentences",
                            "Punctuation rules",
                            "Common sentence errors",
                        ),
                        resources=(
                            Resource("Sentence Structure Explained", "video", "Visual guide to creating strong sentences", "beginner", 18),
                            Resource("Sentence Structure Quiz", "quiz", "Test your understanding of sentence construction", "beginner", 15),
                        ),
                    ),
                ),
            ),
            Topic(
                id="english-writing",
                title="Writing Essays",
                description="Crafting effective essays and arguments",
                difficulty="intermediate",
                prerequisite_topic_ids=("english-grammar",),
                subtopics=(
                    SubTopic(
                        id="english-writing-structure",
                        title="Essay Structure",
                        description="Organization and components of effective essays",
                        key_points=(
                            "Introduction, body, and conclusion",
                            "Thesis statements",
                            "Topic sentences and transitions",
                            "Supporting evidence and examples",
                        ),
                        resources=(
                            Resource("Essay Structure Blueprint", "article", "Complete guide to structuring effective essays", "intermediate", 20),
                            Resource("Essay Planning Workshop", "interactive", "Interactive tool to plan and structure your essay", "intermediate", 30),
                        ),
                    ),
                ),
            ),
        ),
    ),
    Subject(
        id="history",
        name="History",
        description="Explore the past to understand the present and shape the future",
        color="#9F7AEA",
        topics=(
            Topic(
                id="history-ancient",
                title="Ancient Civilizations",
                description="Early human societies and their contributions",
                difficulty="beginner",
                subtopics=(
                    SubTopic(
                        id="history-ancient-mesopotamia",
                        title="Mesopotamia",
                        description="The cradle of civilization between the Tigris and Euphrates rivers",
                        key_points=(
                            "Development of writing (cuneiform)",
                            "Early cities and governance",
                            "Sumerian, Akkadian, and Babylonian cultures",
                            "Code of Hammurabi",
                        ),
                        resources=(
                            Resource("Mesopotamia Overview", "video", "Visual journey through Mesopotamian civilization", "beginner", 22),
                            Resource("Mesopotamian Artifacts Interactive", "interactive", "Explore important artifacts and their significance", "beginner", 25),
                        ),
                    ),
                    SubTopic(
                        id="history-ancient-egypt",
                        title="Ancient Egypt",
                        description="Civilization along the Nile River",
                        key_points=(
                            "Pharaohs and social structure",
                            "Pyramids and monuments",
                            "Religious beliefs and practices",
                            "Daily life in ancient Egypt",
                        ),
                        resources=(
                            Resource("Egypt: Life Along the Nile", "article", "Comprehensive overview of Egyptian civilization", "beginner", 18),
                            Resource("Egyptian Chronology Quiz", "quiz", "Test your knowledge of Egyptian timelines and events", "beginner", 15),
                        ),
                    ),
                ),
            ),
        ),
    ),
    Subject(
        id="programming",
        name="Programming",
        description="Learn to code and create software solutions",
        color="#3182CE",
        topics=(
            Topic(
                id="programming-basics",
                title="Programming Basics",
                description="Fundamental concepts of coding and computer science",
                difficulty="beginner",
                subtopics=(
                    SubTopic(
                        id="programming-basics-concepts",
                        title="Core Concepts",
                        description="Essential programming principles and terminologies",
                        key_points=(
                            "Variables and data types",
                            "Control flow (if statements, loops)",
                            "Functions and methods",
                            "Basic algorithms",
                        ),
                        resources=(
                            Resource("Programming Fundamentals", "video", "Introduction to core programming concepts", "beginner", 25),
                            Resource("Coding Basics Practice", "practice", "Hands-on practice with basic programming concepts", "beginner", 30),
                        ),
                    ),
                    SubTopic(
                        id="programming-basics-languages",
                        title="Introduction to Languages",
                        description="Overview of common programming languages and their uses",
                        key_points=(
                            "JavaScript and web development",
                            "Python for versatility and data science",
                            "Java and object-oriented programming",
                            "Choosing the right language for your goals",
                        ),
                        resources=(
                            Resource("Programming Language Comparison", "article", "Detailed comparison of popular programming languages", "beginner", 20),
                            Resource("Language Selection Interactive Guide", "interactive", "Interactive tool to help choose your first language", "beginner", 15),
                        ),
                    ),
                ),
            ),
            Topic(
                id="programming-web",
                title="Web Development",
                description="Creating websites and web applications",
                difficulty="intermediate",
                prerequisite_topic_ids=("programming-basics",),
                subtopics=(
                    SubTopic(
                        id="programming-web-html-css",
                        title="HTML and CSS Fundamentals",
                        description="Building blocks of web pages",
                        key_points=(
                            "HTML document structure",
                            "CSS styling and selectors",
                            "Responsive design principles",
                            "Forms and user input",
                        ),
                        resources=(
                            Resource("HTML & CSS Bootcamp", "video", "Comprehensive introduction to HTML and CSS", "intermediate", 35),
                            Resource("Web Page Builder", "interactive", "Interactive tool to practice HTML/CSS concepts", "intermediate", 30),
                        ),
                    ),
                ),
            ),
        ),
    ),
)
