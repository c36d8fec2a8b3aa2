# run_journey.py
"""
Runs one complete journey without a browser: resolve a point, fly the walking
route and the outfall on a virtual clock, and write the result to a map.
"""
import argparse
import logging

from followyourflush.camera.scheduler import ManualScheduler
from followyourflush.camera.surface import RecordingSurface
from followyourflush.camera.visualization import JourneyMapVisualizer
from followyourflush.path_planner.outfall import build_outfall_network
from followyourflush.session.core import FlushSession, journey_summary
from followyourflush.session.data_models import InputEvent


def parse_args():
    parser = argparse.ArgumentParser(description="Follow a flush from a Toronto address to Lake Ontario.")
    parser.add_argument("--lon", type=float, default=-79.4860)
    parser.add_argument("--lat", type=float, default=43.6510)
    parser.add_argument("--facilities", help="Local GeoJSON of treatment plants (defaults to the feature service)")
    parser.add_argument("--catchments", help="Local GeoJSON of catchment areas (defaults to the feature service)")
    parser.add_argument("--output", default="journey_map.html")
    return parser.parse_args()


def main():
    args = parse_args()
    scheduler = ManualScheduler()
    surface = RecordingSurface()
    session = FlushSession(surface=surface, scheduler=scheduler)

    print("--- Loading Plants and Catchments ---")
    if args.facilities and args.catchments:
        result = session.load_feature_files(args.facilities, args.catchments)
    else:
        result = session.load_features()
    print(result['message'])
    if not result['success']:
        return

    print(f"\n[1] Resolving ({args.lon}, {args.lat})...")
    result = session.click(args.lon, args.lat)
    print(f"  > {result['message']}")
    if not result['success']:
        return
    print(f"  > Address: {result['data']['address']}")

    print("\n[2] Following the walking route...")
    result = session.handle_event(InputEvent.CONFIRM)
    print(f"  > {result['message']}")
    if not result['success']:
        return
    scheduler.run_until_idle()
    print(f"  > Camera frames rendered: {surface.frame_count}")

    print("\n[3] Following the outfall...")
    print(f"  > {session.handle_event(InputEvent.SKIP)['message']}")
    scheduler.run_until_idle()

    if session.distance:
        print("\n" + journey_summary(session.distance))
        print(f"Total: {session.distance.display}")

    journey = JourneyMapVisualizer().create_journey_map(
        catchments=session.resolver.catchments,
        facility=session.resolution.facility,
        display_path=session.route.display_path,
        outfalls=build_outfall_network(session.resolver.facilities)
    )
    journey.save(args.output)
    print(f"\nMap written to {args.output}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    main()
