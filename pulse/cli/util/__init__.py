from pulse.cli.util.paths import PulsePaths

__all__ = ["PulsePaths"]
