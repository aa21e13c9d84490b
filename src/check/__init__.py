"""Repository-wide import firewall check."""

from check.runner import CheckResult, Violation, check_file, check_tree

__all__ = ["CheckResult", "Violation", "check_file", "check_tree"]
