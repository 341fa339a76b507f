"""
python -m scripts.seed_questions
"""

import sys

sys.path.insert(0, ".")

from dotenv import load_dotenv
load_dotenv()

from app.services.question_bank import seed_default_questions
from app.stores import get_backend


def seed_questions():
    """Load the default question bank into the configured store."""
    backend = get_backend()
    with backend.open() as store:
        seeded = seed_default_questions(store)
    print(f"Seeded {seeded} questions into the {backend.name} store")


if __name__ == "__main__":
    seed_questions()
