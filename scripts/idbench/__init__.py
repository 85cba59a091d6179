"""Identifier pool benchmarking components.

Identifier sources, the timed trial runner, configuration models and the
comparison report used by the identifier pool benchmark.
"""

from __future__ import annotations
