from svc_uploads.app.core.env import Env, get_env, get_env_flags, pick

__all__ = [
    "Env",
    "get_env",
    "get_env_flags",
    "pick",
]
