# src/artifact_graph/samples/__init__.py
"""Grafos de exemplo."""

from .math_agent import build_math_graph, math_agent

__all__ = ["build_math_graph", "math_agent"]
