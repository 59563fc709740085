from .run_svfind import main as run_svfind_main

__all__ = [
    'run_svfind_main',
]
