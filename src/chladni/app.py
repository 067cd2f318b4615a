"""Realtime installation window.

The keyboard stands in for the installation's sliders; with --device-stdin,
device lines such as "equity 200 dial" or "climate 24.5 temp" are read from
stdin on a background thread. Both feed the same control channels.

    python -m chladni.app [--particles 10000] [--active 3000] [--fps 30]
    some-device-bridge | python -m chladni.app --device-stdin --save-gif out.gif

Keys:
    E / D   equity up / down
    C / X   climate up / down
    S / A   surveillance up / down
    UP/DOWN particles up / down
    F       toggle nodal lines
    R       reseed all particles
    ESC     quit
"""

import argparse
import random
import sys
import time
from collections import deque

import imageio
import pygame

from chladni.canvas import PygameCanvas
from chladni.controls import (
    PARTICLES,
    ControlInputs,
    DeviceListener,
    clamp,
    normalize_control,
)
from chladni.simulation import CANVAS_SIZE, NUM_PARTICLES, SimulationState

# --- Display ---
FPS = 30
DEFAULT_ACTIVE = 3000

# --- Keyboard steps ---
CONTROL_STEP = 0.5
PARTICLE_STEP = 500

KEY_BINDINGS = {
    pygame.K_e: ("equity", CONTROL_STEP),
    pygame.K_d: ("equity", -CONTROL_STEP),
    pygame.K_c: ("climate", CONTROL_STEP),
    pygame.K_x: ("climate", -CONTROL_STEP),
    pygame.K_s: ("surveillance", CONTROL_STEP),
    pygame.K_a: ("surveillance", -CONTROL_STEP),
    pygame.K_UP: (PARTICLES, PARTICLE_STEP),
    pygame.K_DOWN: (PARTICLES, -PARTICLE_STEP),
}

# --- GIF capture ---
GIF_FRAMES = 150
GIF_FPS = 30


def handle_key(state, key):
    """Apply one key press. Returns False when the app should quit."""
    if key == pygame.K_ESCAPE:
        return False
    if key == pygame.K_f:
        state.show_nodes = not state.show_nodes
    elif key == pygame.K_r:
        state.reset()
    elif key in KEY_BINDINGS:
        name, delta = KEY_BINDINGS[key]
        value = state.mapper.latest(name) + delta
        if name == PARTICLES:
            value = clamp(value, 0, state.mapper.capacity)
        else:
            value = normalize_control(value)
        state.mapper.push(name, value)
    return True


def build_parser():
    parser = argparse.ArgumentParser(description="Chladni particle field installation")
    parser.add_argument(
        "--particles", type=int, default=NUM_PARTICLES, help=f"Pool capacity (default: {NUM_PARTICLES})"
    )
    parser.add_argument(
        "--active", type=int, default=DEFAULT_ACTIVE, help=f"Particles moved per frame (default: {DEFAULT_ACTIVE})"
    )
    parser.add_argument("--equity", type=float, default=5.0, help="Starting equity 1-10")
    parser.add_argument("--climate", type=float, default=5.0, help="Starting climate 1-10")
    parser.add_argument("--surveillance", type=float, default=5.0, help="Starting surveillance 1-10")
    parser.add_argument("--width", type=int, default=CANVAS_SIZE[0])
    parser.add_argument("--height", type=int, default=CANVAS_SIZE[1])
    parser.add_argument("--fps", type=int, default=FPS, help=f"Frame rate (default: {FPS})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--device-stdin", action="store_true", help="Read device lines from stdin"
    )
    parser.add_argument(
        "--save-gif", type=str, default=None, help=f"Save the last {GIF_FRAMES} frames to this GIF on exit"
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    clock = pygame.time.Clock()

    canvas = PygameCanvas(screen)
    capacity = max(0, args.particles)
    state = SimulationState(
        canvas,
        capacity=capacity,
        inputs=ControlInputs(args.equity, args.climate, args.surveillance),
        particle_count=args.active,
        rng=random.Random(args.seed),
    )
    print(f"\nChladni field: {args.width}x{args.height} @ {args.fps} fps")
    print(state.summary())
    print()

    listener = None
    if args.device_stdin:
        listener = DeviceListener(sys.stdin, state.mapper)
        listener.start()

    frames = deque(maxlen=GIF_FRAMES)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                running = handle_key(state, event.key) and running

        start = time.time()
        state.frame()
        pygame.display.flip()

        if args.save_gif:
            frames.append(canvas.frame_array())

        elapsed = (time.time() - start) * 1000
        pygame.display.set_caption(
            f"Chladni  |  tick={state.tick}  {state.summary()}  "
            f"{elapsed:.0f}ms  [E/D C/X S/A UP/DOWN F=nodes R=reseed]"
        )

        clock.tick(args.fps)

    if listener:
        listener.stop()
    pygame.quit()

    if args.save_gif and frames:
        imageio.mimsave(args.save_gif, list(frames), duration=1000 / GIF_FPS, loop=0)
        print(f"Saved: {args.save_gif} ({len(frames)} frames)")


if __name__ == "__main__":
    main()
