"""
Routing module - hint precedence for the routing engine
"""

from .hint_router import HintRouteResolver, HintRouteDecision, StatementRouter

__all__ = ['HintRouteResolver', 'HintRouteDecision', 'StatementRouter']
