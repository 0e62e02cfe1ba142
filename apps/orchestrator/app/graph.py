# apps/orchestrator/app/graph.py

from langgraph.graph import StateGraph, END
from .state import GraphState
from .nodes import resolve_airports, search_flights, build_itinerary


def after_resolve(state: GraphState) -> str:
    if state.get("error"):
        return "end"
    return "flights" if state["request_body"].include_flights else "itinerary"


workflow = StateGraph(GraphState)

# Add Nodes
workflow.add_node("resolve_airports", resolve_airports)
workflow.add_node("search_flights", search_flights)
workflow.add_node("build_itinerary", build_itinerary)

# Set Entry Point
workflow.set_entry_point("resolve_airports")

# Edges: the itinerary prompt depends on the chosen airport, so everything is sequential
workflow.add_conditional_edges(
    "resolve_airports",
    after_resolve,
    {"flights": "search_flights", "itinerary": "build_itinerary", "end": END},
)
workflow.add_edge("search_flights", "build_itinerary")
workflow.add_edge("build_itinerary", END)

app = workflow.compile()
