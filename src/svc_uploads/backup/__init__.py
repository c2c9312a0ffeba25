from .archive import build_archive, remove_archive, write_archive

__all__ = ["build_archive", "remove_archive", "write_archive"]
