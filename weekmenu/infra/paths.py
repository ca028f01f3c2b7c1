from weekmenu.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
RECIPES_FILE = DATA_DIR / 'recipes.json'
PLAN_FILE = DATA_DIR / 'plan.json'
CHECKLIST_FILE = DATA_DIR / 'grocery_checklist.json'

__all__ = ['DATA_DIR', 'RECIPES_FILE', 'PLAN_FILE', 'CHECKLIST_FILE']
