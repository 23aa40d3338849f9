"""Ports: contracts implemented outside depfilter."""

from depfilter.domain.ports.target import FilterTarget

__all__ = ["FilterTarget"]
