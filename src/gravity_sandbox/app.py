# src/gravity_sandbox/app.py
"""
Gravity Sandbox - interactive front end
=======================================

Generates a star system, then flies a probe through it under full N-body
gravity. The camera follows the probe; the red ellipse is the orbit the
probe would follow around the nearest body that currently holds it.

Controls:
    mouse           aim the ship
    left button     thrust
    wheel           zoom
    space           pause
    R               restart (new seed for generated systems)
    Esc             quit
"""
from __future__ import annotations

import argparse
import logging
import math
import random
import sys
from dataclasses import replace

import pygame

from .core.config import GENERATION_CFG, PHYSICS_CFG, RENDER_CFG, GenerationCfg, RenderCfg
from .core.generation import generate_system, make_rng
from .core.logging_utils import RunLogger
from .core.model import SimState
from .core.physics import specific_orbital_energy
from .core.simulation import Simulation
from .core.timekeeping import FrameTimer
from .data.scenarios import GENERATED_KEY, SCENARIO_DEFINITIONS, SCENARIOS, get_scenario
from .render import Camera, draw_bodies, draw_hud, draw_orbit_ellipse, draw_ship

logger = logging.getLogger(__name__)


def scenario_help() -> str:
    entries = [f"{GENERATED_KEY}: random system from --seed (default)"]
    entries += [f"{s.key}: {s.name}, {s.description}" for s in SCENARIO_DEFINITIONS]
    return "starting conditions; " + "; ".join(entries)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="2D gravity sandbox with orbit prediction.")
    parser.add_argument("--seed", type=int, default=None, help="seed for system generation")
    parser.add_argument(
        "--scenario",
        default=GENERATED_KEY,
        choices=[GENERATED_KEY, *sorted(SCENARIOS)],
        help=scenario_help(),
    )
    parser.add_argument("--rocky", type=int, default=GENERATION_CFG.rocky_count)
    parser.add_argument("--gas-giants", type=int, default=GENERATION_CFG.gas_giant_count)
    parser.add_argument("--record", action="store_true", help="record the run as CSV")
    parser.add_argument("--runs-dir", default="data/runs", help="where recorded runs go")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return parser


def create_state(scenario: str, seed: int | None, gen_cfg: GenerationCfg) -> SimState:
    if scenario == GENERATED_KEY:
        logger.info("Generating system with seed %s", seed)
        return generate_system(make_rng(seed), gen_cfg, PHYSICS_CFG)
    return get_scenario(scenario).create(PHYSICS_CFG)


def create_simulation(
    args: argparse.Namespace,
    gen_cfg: GenerationCfg,
    seed: int | None,
) -> Simulation:
    state = create_state(args.scenario, seed, gen_cfg)
    recorder = None
    if args.record:
        recorder = RunLogger(args.runs_dir)
        logger.info("Recording run to %s", recorder.run_dir)
    simulation = Simulation(state, PHYSICS_CFG, recorder)
    if recorder is not None:
        meta = simulation.meta()
        meta.update({"scenario": args.scenario, "seed": seed})
        recorder.write_meta(meta)
    return simulation


def next_seed(scenario: str, seed: int | None) -> int | None:
    """Seed for a regenerated system; literal scenarios keep theirs."""

    if scenario != GENERATED_KEY:
        return seed
    return random.randrange(2**32)


def hud_lines(simulation: Simulation) -> list[str]:
    state = simulation.state
    speed = math.hypot(*state.probe.velocity)
    lines = [f"t = {state.time:,.1f} s", f"|v| = {speed:,.1f}"]
    orbit = simulation.orbit
    if orbit is None:
        lines.append("no bound orbit")
    else:
        lines.append(f"e = {orbit.eccentricity:.3f}  p = {orbit.semi_latus_rectum:,.0f}")
        lines.append(f"focus: body {orbit.body_index}")
        focus = state.bodies[orbit.body_index]
        eps = specific_orbital_energy(
            state.probe.position - focus.position,
            state.probe.velocity - focus.velocity,
            simulation.cfg.gravitational_constant * focus.mass,
        )
        lines.append(f"eps = {eps:,.1f}")
    if state.paused:
        lines.append("PAUSED")
    return lines


def run(args: argparse.Namespace, render_cfg: RenderCfg = RENDER_CFG) -> None:
    gen_cfg = replace(GENERATION_CFG, rocky_count=args.rocky, gas_giant_count=args.gas_giants)
    seed = args.seed

    pygame.init()
    screen = pygame.display.set_mode((render_cfg.width, render_cfg.height))
    pygame.display.set_caption(render_cfg.window_title)
    font = pygame.font.Font(None, render_cfg.hud_font_size)
    clock = pygame.time.Clock()

    camera = Camera(
        (render_cfg.width, render_cfg.height),
        render_cfg.initial_ppm,
        min_ppm=render_cfg.min_ppm,
        max_ppm=render_cfg.max_ppm,
    )
    simulation = create_simulation(args, gen_cfg, seed)
    timer = FrameTimer()
    mouse_down = False

    try:
        running = True
        while running:
            # --- Input ---
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        simulation.toggle_pause()
                    elif event.key == pygame.K_r:
                        simulation.close()
                        seed = next_seed(args.scenario, seed)
                        simulation = create_simulation(args, gen_cfg, seed)
                        timer.reset()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    mouse_down = True
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    mouse_down = False
                elif event.type == pygame.MOUSEWHEEL and event.y != 0:
                    camera.zoom_by_factor(render_cfg.zoom_step ** event.y)

            # --- Steering: ship faces the pointer ---
            probe = simulation.state.probe
            mx, my = pygame.mouse.get_pos()
            wx, wy = camera.screen_to_world(mx, my)
            heading = math.atan2(wy - probe.position[1], wx - probe.position[0])
            simulation.steer(heading, mouse_down)

            # === PHYSICS UPDATE ===
            simulation.advance(timer.tick())
            camera.follow(simulation.state.probe.position)

            # --- Draw ---
            screen.fill(render_cfg.background_color)
            ellipse = simulation.ellipse
            if ellipse is not None:
                draw_orbit_ellipse(
                    screen,
                    camera,
                    ellipse,
                    color=render_cfg.orbit_color,
                    width=render_cfg.orbit_line_width,
                    segments=render_cfg.orbit_segments,
                )
            draw_bodies(screen, camera, simulation.state)
            draw_ship(
                screen,
                camera,
                simulation.state.probe,
                height=render_cfg.ship_height,
                color=render_cfg.ship_color,
            )
            draw_hud(screen, font, hud_lines(simulation), color=render_cfg.hud_text_color)

            pygame.display.flip()
            clock.tick(render_cfg.frame_rate_cap)
    finally:
        simulation.close()
        pygame.quit()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.rocky < 0 or args.gas_giants < 0:
        parser.error("planet counts cannot be negative")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(module)s - %(message)s",
    )
    try:
        run(args)
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
