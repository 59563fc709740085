from .main_pipeline import main, run_insertion_pipeline

# Alias for convenience
run_pipeline = main

__all__ = [
    'main',
    'run_pipeline',
    'run_insertion_pipeline',
]
