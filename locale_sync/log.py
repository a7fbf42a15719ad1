"""Status lines printed while a run progresses."""

PROGRAM_NAME = "locale-sync"

MANAGING     = "managing"
GENERATING   = "generating"
INITIALIZING = "initializing"

_ACTION_WIDTH = max(len(MANAGING), len(GENERATING), len(INITIALIZING))


def message(action: str, text: str) -> None:
    print(f"[{PROGRAM_NAME}]: {action.ljust(_ACTION_WIDTH)} - {text}")
