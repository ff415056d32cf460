from .checks import run_structure_checks

__all__ = ["run_structure_checks"]
