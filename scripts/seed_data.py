import sys
import os

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from domain.constants import LOG_LEVEL
from services import records
from utils.log import configure_logging

if __name__ == '__main__':
    configure_logging(LOG_LEVEL)
    counts = records.seed_all()
    summary = ", ".join(f"{n} {key}" for key, n in counts.items())
    print(f"Successfully seeded {summary} into data/")
