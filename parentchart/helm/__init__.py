"""Helm chart scanning, mutation and dependency rebuild."""

from .chart import ParentChart
from .registry import DependencyRebuilder
from .scanner import ControllerScanner

__all__ = ["ControllerScanner", "DependencyRebuilder", "ParentChart"]
