# main.py v20.0
# Part of Ginzburg-Landau Lab: Vortices on a Torus
# v20.0: "Headless Driver"
# - Owns the frame loop: every tick runs steps_per_frame solver steps and one
#   render, exactly like the interactive window would.
# - Scripted clicks (--vortex X,Y in display pixels) are applied through the
#   session before the first tick, alternating +1/-1 like real clicks.
# - `--fast` skips frame PNGs; analytics and metadata are always written.

import numpy as np
import argparse
import os
import shutil
import time
import json
from tqdm import tqdm

from styling import C, cprint
from physics_law import GinzburgLandauLaw
from session import Session
from analytics import FieldAnalytics
from initial_conditions import InitialStateFactory
from renderer import save_frame

def parse_point(text: str) -> tuple:
    """Parses 'X,Y' into a pair of floats."""
    try:
        x_str, y_str = text.split(',')
        return float(x_str), float(y_str)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected X,Y but got '{text}'.")

def positive_int(text: str) -> int:
    """Parses an integer that must be at least 1."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected an integer but got '{text}'.")
    if value < 1:
        raise argparse.ArgumentTypeError(f"Expected a value >= 1 but got {value}.")
    return value

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the Ginzburg-Landau torus simulation headless.")

    parser.add_argument('-s', '--seed', type=int, default=None, help="Seed for reproducibility.")
    parser.add_argument('-f', '--frames', type=int, default=300, help="Number of rendered frames (ticks).")
    parser.add_argument('-W', '--display-width', type=int, default=960, help="Display surface width in pixels.")
    parser.add_argument('-H', '--display-height', type=int, default=540, help="Display surface height in pixels.")
    parser.add_argument('-cs', '--cell-size', type=float, default=12, help="Target cell size in display pixels (min 2).")
    parser.add_argument('-D', '--diffusion', type=float, default=0.5, help="Diffusion constant D.")
    parser.add_argument('--dt', type=float, default=0.2, help="Time step.")
    parser.add_argument('--ic', type=str, default='soup', choices=['soup', 'uniform', 'vortex'],
                        help="Initial condition type.")
    parser.add_argument('--load', type=str, default=None,
                        help="Start from a saved field_final.npz (grid size must match).")
    parser.add_argument('-n', '--noise', type=float, default=0.0, help="Thermal noise level.")
    parser.add_argument('-spf', '--steps-per-frame', type=int, default=1, help="Solver steps per rendered frame.")
    parser.add_argument('--smooth', action='store_true', help="Bilinear upscaling instead of nearest-neighbor.")
    parser.add_argument('-v', '--vortex', type=parse_point, action='append', default=[],
                        help="Click at X,Y (display pixels) before the run. Repeatable.")
    parser.add_argument('-se', '--save-every', type=positive_int, default=1, help="Save every N-th frame as PNG.")
    parser.add_argument('--fast', action='store_true', help="Enable fast mode: skip saving frames to disk.")
    return parser

def main(argv=None):
    """Main function to run the simulation orchestrator."""
    args = build_parser().parse_args(argv)

    SEED = args.seed if args.seed is not None else np.random.randint(0, 1_000_000)

    run_name = (f"SEED_{SEED}_{args.display_width}x{args.display_height}_c{args.cell_size:g}"
                f"_D{args.diffusion:g}_dt{args.dt:g}_n{args.noise:g}")
    RUN_DIR = f"run_{run_name}"
    FRAMES_DIR = os.path.join(RUN_DIR, 'frames')

    cprint(f"\n--- GINZBURG-LANDAU LAB: VORTICES ON A TORUS ---", C.HEADER, attrs=C.BOLD_ATTR)
    cprint(f"Starting run: {run_name}", C.INFO)

    # --- Build Components ---
    # Everything that can reject the arguments runs before the run directory is touched
    cprint("\n--- STAGE 1: ASSEMBLING COMPONENTS ---", C.SUBHEADER, attrs=C.BOLD_ATTR)
    try:
        law = GinzburgLandauLaw(diffusion=args.diffusion, dt=args.dt,
                                noise_level=args.noise, steps_per_frame=args.steps_per_frame)
    except (TypeError, ValueError) as e:
        cprint(f"Error: invalid physics parameters: {e}", C.ERROR)
        raise SystemExit(2)

    try:
        session = Session(args.display_width, args.display_height,
                          target_cell_size=args.cell_size, law=law,
                          smooth=args.smooth, seed=SEED)
    except ValueError as e:
        cprint(f"Error: invalid display geometry: {e}", C.ERROR)
        raise SystemExit(2)

    # The session starts from the hot soup; other states overwrite it
    if args.ic != 'soup':
        InitialStateFactory.create(args.ic).generate(session.field)

    if args.load is not None:
        try:
            with np.load(args.load) as saved:
                session.field.load_complex(saved['re'] + 1j * saved['im'])
        except (OSError, KeyError, ValueError) as e:
            cprint(f"Error: cannot load field from '{args.load}': {e}", C.ERROR)
            raise SystemExit(2)
        cprint(f"   -> Loaded field from '{args.load}'", C.DEBUG)

    for x, y in args.vortex:
        winding = session.spawn_vortex(x, y)
        cprint(f"   -> Imprinted winding {winding:+d} at display ({x:g}, {y:g})", C.DEBUG)

    if os.path.exists(RUN_DIR):
        cprint(f"Warning: Run directory '{RUN_DIR}' already exists. Overwriting.", C.WARNING)
        shutil.rmtree(RUN_DIR)
    os.makedirs(FRAMES_DIR)

    analytics = FieldAnalytics()

    geometry = session.geometry
    metadata = {'run_name': run_name, 'seed': SEED, 'max_frames': args.frames,
                'display_size': [args.display_width, args.display_height],
                'grid_size': [geometry.width, geometry.height],
                'cell_size': [geometry.cell_width, geometry.cell_height],
                'diffusion': law.diffusion, 'dt': law.dt, 'noise_level': law.noise_level,
                'steps_per_frame': law.steps_per_frame, 'stable_dt': law.is_stable,
                'smooth': args.smooth, 'initial_condition': args.ic, 'loaded_from': args.load,
                'vortices': [list(p) for p in args.vortex],
                'final_frame_count': 0}

    cprint("\n--- STAGE 2: SIMULATING ---", C.SUBHEADER, attrs=C.BOLD_ATTR)
    start_time = time.time()
    final_frame_count = 0

    try:
        for frame in tqdm(range(args.frames), desc="Simulating", bar_format="{l_bar}{bar:30}{r_bar}"):
            surface = session.tick()
            analytics.analyze_step(session.field, session.frame_count)

            if not args.fast and frame % args.save_every == 0:
                save_frame(surface, os.path.join(FRAMES_DIR, f"frame_{frame + 1:05d}.png"))
            final_frame_count = frame + 1

    except KeyboardInterrupt:
        cprint("\nSimulation interrupted by user.", C.WARNING)

    # --- Finalize and Generate Reports ---
    cprint(f"\nSimulation finished at frame {final_frame_count}.", C.SUCCESS)
    print(f"Total simulation time: {time.time() - start_time:.2f} seconds.")

    np.savez_compressed(os.path.join(RUN_DIR, 'field_final.npz'),
                        re=session.field.grid_view(session.field.re),
                        im=session.field.grid_view(session.field.im))

    metadata['final_frame_count'] = final_frame_count
    metadata['solver_steps'] = session.frame_count
    metadata.update(analytics.summary())
    with open(os.path.join(RUN_DIR, "metadata.json"), 'w') as f:
        json.dump(metadata, f, indent=4)

    analytics.generate_report(RUN_DIR)

    cprint(f"\nRun '{run_name}' complete.", C.HEADER, attrs=C.BOLD_ATTR)
    if not args.fast:
        cprint(f"Frames saved in '{FRAMES_DIR}'.", C.SUCCESS)
    return RUN_DIR

if __name__ == "__main__":
    main()
