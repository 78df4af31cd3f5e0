import os
from pathlib import Path

# Centralized paths for data files (single source of truth)
DATA_DIR = (Path(__file__).parent.parent / 'data').resolve()
RECIPES_FILE = Path(os.getenv('RECIPES_FILE', str(DATA_DIR / 'recipes.json')))
FALLBACK_DISHES_FILE = DATA_DIR / 'fallback_dishes.json'

__all__ = ['DATA_DIR', 'RECIPES_FILE', 'FALLBACK_DISHES_FILE']
