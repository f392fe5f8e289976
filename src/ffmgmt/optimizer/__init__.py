from .service import EXACT, GREEDY, STRATEGIES, build_pool, resolve_strategy, solve_optimal_lineup

__all__ = [
    "EXACT",
    "GREEDY",
    "STRATEGIES",
    "build_pool",
    "resolve_strategy",
    "solve_optimal_lineup",
]
