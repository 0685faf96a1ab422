from .corrector import Outcome, process_text
from .prompts import Action, resolve_prompt
from .settings import CorrectorOptions

__version__ = "0.1.0"

__all__ = ["Action", "CorrectorOptions", "Outcome", "process_text", "resolve_prompt"]
