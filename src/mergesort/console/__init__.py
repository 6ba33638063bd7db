"""
Console front-ends: the interactive sort session and the showcase demo.
"""

from .demo import run_demo
from .interactive import interactive_session, parse_int_list, run_round

__all__ = ["interactive_session", "parse_int_list", "run_round", "run_demo"]
