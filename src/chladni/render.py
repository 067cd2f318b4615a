"""Offline rendering: run the particle field headless and save a PNG.

    python -m chladni.render [--steps 300] [--equity 5] [--climate 5] [--surveillance 5]
    python -m chladni.render --steps 600 --surveillance 9 --output trails.png --gif trails.gif
"""

import argparse
import random
import time

import imageio

from chladni.canvas import ImageCanvas
from chladni.controls import ControlInputs
from chladni.simulation import CANVAS_SIZE, NUM_PARTICLES, SimulationState

# --- Output ---
DEFAULT_STEPS = 300
GIF_EVERY = 5
GIF_FPS = 30


def build_parser():
    parser = argparse.ArgumentParser(description="Chladni particle field offline renderer")
    parser.add_argument(
        "--steps", type=int, default=DEFAULT_STEPS, help=f"Frames to simulate (default: {DEFAULT_STEPS})"
    )
    parser.add_argument(
        "--particles", type=int, default=NUM_PARTICLES, help=f"Pool capacity (default: {NUM_PARTICLES})"
    )
    parser.add_argument(
        "--active", type=int, default=None, help="Particles moved per frame (default: all)"
    )
    parser.add_argument("--equity", type=float, default=5.0, help="Equity 1-10 (default: 5)")
    parser.add_argument("--climate", type=float, default=5.0, help="Climate 1-10 (default: 5)")
    parser.add_argument(
        "--surveillance", type=float, default=5.0, help="Surveillance 1-10 (default: 5)"
    )
    parser.add_argument("--width", type=int, default=CANVAS_SIZE[0], help=f"Canvas width (default: {CANVAS_SIZE[0]})")
    parser.add_argument("--height", type=int, default=CANVAS_SIZE[1], help=f"Canvas height (default: {CANVAS_SIZE[1]})")
    parser.add_argument("--nodes", action="store_true", help="Overlay the field's nodal lines")
    parser.add_argument(
        "--output", type=str, default="chladni_render.png", help="Output PNG (default: chladni_render.png)"
    )
    parser.add_argument("--gif", type=str, default=None, help=f"Also save every {GIF_EVERY}th frame as a GIF")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    return parser


def render(args):
    """Run the simulation described by parsed args. Returns the canvas."""
    canvas = ImageCanvas(args.width, args.height)
    inputs = ControlInputs(args.equity, args.climate, args.surveillance)
    capacity = max(0, args.particles)
    state = SimulationState(
        canvas,
        capacity=capacity,
        inputs=inputs,
        particle_count=capacity if args.active is None else args.active,
        rng=random.Random(args.seed),
    )
    state.show_nodes = args.nodes

    print(f"{args.output}")
    print(f"{capacity} particles, {args.width}x{args.height}, {args.steps} steps")
    print(state.summary())
    print()

    frames = []
    t_start = time.time()
    for step in range(args.steps):
        state.frame()

        if args.gif and step % GIF_EVERY == 0:
            frames.append(canvas.frame_array())

        elapsed = time.time() - t_start
        if (step + 1) % 10 == 0 or step == 0:
            rate = (step + 1) / max(elapsed, 1e-9)
            eta = (args.steps - step - 1) / rate
            print(
                f"  step {step + 1}/{args.steps}  "
                f"({elapsed:.1f}s elapsed, ~{eta:.0f}s remaining, {rate:.1f} steps/s)"
            )

    print()
    print(f"Simulation complete: {time.time() - t_start:.1f}s, {state.pool.deaths} particles recycled")

    canvas.save(args.output)
    print(f"Saved: {args.output} ({args.width}x{args.height})")

    if args.gif and frames:
        imageio.mimsave(args.gif, frames, duration=1000 / GIF_FPS, loop=0)
        print(f"Saved: {args.gif} ({len(frames)} frames)")

    return canvas


def main(argv=None):
    render(build_parser().parse_args(argv))


if __name__ == "__main__":
    main()
