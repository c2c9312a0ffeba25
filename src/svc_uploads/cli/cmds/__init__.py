from .backup_cmds import register as register_backup
from .serve_cmds import register as register_serve

__all__ = [
    "register_backup",
    "register_serve",
]
