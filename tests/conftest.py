"""Make the shared test fixtures available to every test module."""

from .fixtures.pddl_fixtures import (  # noqa: F401
    action_costs_domain,
    action_costs_problem,
    briefcase_world_domain,
    get_paid_problem,
    mov_b_action,
    move_domain,
    move_problem,
    put_in_action,
    reachability_domain,
    reachability_problem,
    switches_domain,
    switches_problem,
    take_out_action,
    typed_list_of_names,
)
from .fixtures.planning_fixtures import (  # noqa: F401
    chain_problem,
    simple_move_problem,
)
