#!/usr/bin/env python3
"""
SecureChain Demo: risk propagation on the sample supply-chain graph.

Runs a propagation from one source node and prints the affected entities,
their paths and the impact level, followed by the graph-wide insights.

By default the engine runs in-process on the configured graph source. With
--api-url the same propagation is requested from a running API instead.

Usage:
    python scripts/demo_run.py                                   # Log4Shell, 3 hops
    python scripts/demo_run.py --source org_mtl --depth 2
    python scripts/demo_run.py --api-url http://localhost:8000   # via the API
"""

import argparse
import sys
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).parent.parent))

from securechain.engine.insights import generate_insights  # noqa: E402
from securechain.engine.propagation import propagate  # noqa: E402
from securechain.storage import GraphSourceError, get_graph_source  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Run a SecureChain risk propagation demo")
    parser.add_argument("--source", default="vuln_cve2021_44228", help="Source node id")
    parser.add_argument("--depth", type=int, default=3, help="Propagation depth (hops)")
    parser.add_argument("--api-url", default=None, help="Query a running API instead")
    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("SecureChain Risk Propagation Demo")
    print("=" * 60)

    if args.api_url:
        result = run_via_api(args.api_url, args.source, args.depth)
    else:
        result = run_local(args.source, args.depth)

    print(f"\nSource:          {result['source_id']}")
    print(f"Depth:           {result['max_depth']}")
    print(f"Affected:        {result['affected_count']}")
    print(f"Average risk:    {result['average_risk']:.1f}")
    print(f"Impact level:    {result['impact_level'].upper()}")

    if result["propagation_paths"]:
        print("\nPropagation paths:")
        for node_id, path in result["propagation_paths"].items():
            hops = len(path) - 1
            print(f"  [{hops} hop{'s' if hops != 1 else ''}] {' -> '.join(path)}")
    else:
        print("\nNo entities affected.")

    print("\n" + "=" * 60 + "\n")


def run_local(source_id: str, depth: int) -> dict:
    """Run the engine in-process and print insights."""
    try:
        graph = get_graph_source().load()
    except GraphSourceError as e:
        print(f"\nCould not load graph: {e}")
        sys.exit(1)

    result = propagate(source_id, graph.nodes, graph.edges, depth)
    insights = generate_insights(graph.nodes, graph.edges, result)

    print(f"\nGraph: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
    print(f"Exposure level: {insights.exposure_level.value.upper()}")
    for chain in insights.critical_chains:
        print(f"  chain: {chain}")

    return result.model_dump(mode="json")


def run_via_api(api_url: str, source_id: str, depth: int) -> dict:
    """Request the propagation from a running API."""
    base = api_url.rstrip("/")
    with httpx.Client(timeout=30) as client:
        try:
            r = client.get(
                f"{base}/api/v1/propagation/{source_id}",
                params={"max_depth": depth},
            )
            r.raise_for_status()
        except httpx.HTTPError as e:
            print(f"\n  Propagation request failed: {e}")
            print("  Make sure the API is running: uvicorn securechain.main:app --reload")
            sys.exit(1)

    return r.json()["data"]["result"]


if __name__ == "__main__":
    main()
