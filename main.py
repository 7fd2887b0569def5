# main.py
import argparse
import json
from dataclasses import asdict

from dispatch_sim.app.build import build
from dispatch_sim.io.config import load_scenario


def run(scenario: str | None, horizon_s: float, vehicle_type: str):
    cfg = load_scenario(scenario) if scenario else None
    engine = build(cfg)

    engine.advance(3.0)
    est = engine.request_ride(vehicle_type, (120.0, 140.0), (520.0, 380.0))
    print(json.dumps({"estimate": asdict(est)}))
    if est.ok:
        receipt = engine.confirm_booking()
        print(json.dumps({"booking": asdict(receipt)}, default=str))

    snap = engine.advance(horizon_s)
    print(
        json.dumps(
            {
                "t": snap.t,
                "generation": snap.generation,
                "available": sum(v.available for v in snap.vehicles),
                "active_bookings": snap.active_bookings,
            }
        )
    )
    engine.close()


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Run a short scripted dispatch session.")
    ap.add_argument("--scenario", help="JSON scenario file", default=None)
    ap.add_argument("--horizon", type=float, default=30.0, help="sim seconds after booking")
    ap.add_argument("--type", dest="vehicle_type", default="Economy")
    args = ap.parse_args()
    run(args.scenario, args.horizon, args.vehicle_type)
