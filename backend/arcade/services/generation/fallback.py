import random
from typing import List, Optional

# Built-in questions are general; the requested topic is carried into each prompt.
FALLBACK_PROMPT = '[{topic}] {question}'

FALLBACK_QUESTIONS = [
    {
        'question': 'What is the time complexity of binary search on a sorted array?',
        'options': ['O(n)', 'O(log n)', 'O(n^2)', 'O(1)'],
        'correctAnswer': 1,
    },
    {
        'question': 'Which data structure serves items in first-in, first-out order?',
        'options': ['Stack', 'Queue', 'Binary tree', 'Hash map'],
        'correctAnswer': 1,
    },
    {
        'question': 'What does HTML stand for?',
        'options': [
            'Hyper Text Markup Language',
            'High Tech Modern Language',
            'Hyper Transfer Markup Language',
            'Home Tool Markup Language',
        ],
        'correctAnswer': 0,
    },
    {
        'question': 'Which HTTP method is conventionally used to create a resource?',
        'options': ['GET', 'DELETE', 'POST', 'HEAD'],
        'correctAnswer': 2,
    },
    {
        'question': 'Which of these is not a relational database?',
        'options': ['PostgreSQL', 'MySQL', 'SQLite', 'Redis'],
        'correctAnswer': 3,
    },
    {
        'question': 'What is the minimum number of moves to solve Tower of Hanoi with 3 disks?',
        'options': ['5', '7', '8', '9'],
        'correctAnswer': 1,
    },
    {
        'question': 'Which git command records staged changes in the repository history?',
        'options': ['git add', 'git push', 'git commit', 'git fetch'],
        'correctAnswer': 2,
    },
    {
        'question': 'Which of these is a Python web framework?',
        'options': ['Django', 'Flask', 'FastAPI', 'All of the above'],
        'correctAnswer': 3,
    },
    {
        'question': 'How many bits are in a byte?',
        'options': ['4', '8', '16', '32'],
        'correctAnswer': 1,
    },
    {
        'question': 'Which protocol secures HTTP traffic?',
        'options': ['FTP', 'SSH', 'TLS', 'SMTP'],
        'correctAnswer': 2,
    },
]

FALLBACK_WORDS = {
    'easy': ['BOOK', 'TREE', 'FISH', 'GAME', 'CODE', 'LAMP', 'BIRD', 'MILK'],
    'medium': ['APPLE', 'HOUSE', 'WATER', 'PLANET', 'GARDEN', 'BRIDGE', 'SILVER', 'CASTLE'],
    'hard': ['PROGRAM', 'NETWORK', 'SCIENCE', 'COMPILER', 'DATABASE', 'KEYBOARD', 'QUESTION', 'TERMINAL'],
}


def fallback_questions(count: int, topic: Optional[str] = None) -> List[dict]:
    """The built-in question set, in fixed order, truncated to count and labelled with topic."""
    questions = []
    for q in FALLBACK_QUESTIONS[:count]:
        prompt = FALLBACK_PROMPT.format(topic=topic, question=q['question']) if topic else q['question']
        questions.append(dict(q, question=prompt, options=list(q['options'])))
    return questions


def fallback_words(difficulty: str, count: int, rng=random) -> List[str]:
    pool = FALLBACK_WORDS.get(difficulty, FALLBACK_WORDS['medium'])
    return rng.sample(pool, min(count, len(pool)))
