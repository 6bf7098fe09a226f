"""Command-line entry points. Scripts in ``scripts/`` are thin wrappers."""

from hypercube.cli.run_sample import run_sample, load_user_config_dict

__all__ = ['run_sample', 'load_user_config_dict']
