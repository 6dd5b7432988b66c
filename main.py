"""
Run a CHIP-8 program.

    python main.py rom=path/to/game.ch8
    python main.py rom=game.ch8 frontend=terminal log_level=DEBUG
    python main.py rom=game.ch8 frontend=headless steps=100000
"""

import os
import sys

import hydra
import jax
from omegaconf import DictConfig, OmegaConf

from chip8vm import DisplayMode, create_state, load_rom
from chip8vm.errors import Chip8Error
from chip8vm.logging import EmulatorLogger
from chip8vm.ui import HeadlessScreen, TerminalScreen


def build_screen(cfg: dict, state, logger):
    frontend = cfg["frontend"]
    if frontend == "pygame":
        from chip8vm.pygame_screen import PygameScreen
        return PygameScreen(
            state,
            logger,
            scale=cfg["scale"],
            fps=cfg["fps"],
            instructions_per_frame=cfg["instructions_per_frame"],
            color_scheme=cfg["color_scheme"],
        )
    if frontend == "terminal":
        return TerminalScreen(state, logger, max_steps=cfg["steps"])
    if frontend == "headless":
        return HeadlessScreen(state, cfg["steps"] or 10_000, logger)
    raise ValueError(f"Unknown frontend '{frontend}'. Available: pygame, terminal, headless")


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    cfg = OmegaConf.to_container(cfg)
    logger = EmulatorLogger(log_level=cfg["log_level"])

    if not cfg["rom"]:
        logger.critical("No ROM given, pass rom=<path>")
        sys.exit(2)

    state = create_state(jax.random.PRNGKey(cfg["seed"]), DisplayMode[cfg["display_mode"]])
    try:
        state = load_rom(state, cfg["rom"])
    except (OSError, Chip8Error) as e:
        logger.log_error(e)
        sys.exit(1)
    logger.log_load(cfg["rom"], os.path.getsize(cfg["rom"]))

    screen = build_screen(cfg, state, logger)
    screen.run()
    if screen.error is not None:
        sys.exit(1)


if __name__ == "__main__":
    main()
