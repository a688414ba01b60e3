# src/game/game.py
import sys, argparse
import pygame
from pygame import K_SPACE, K_ESCAPE
from .config import (
    WIDTH, HEIGHT, FPS, WINDOW_SCALE,
    COLOR_BG, COLOR_FG, COLOR_ACCENT, COLOR_PLAT, COLOR_MARGIN, COLOR_DANGER,
    SEED_DEFAULT, EngineConfig
)
from .events import GameEvent
from .logger import setup_logging
from .session import GamePhase, GameSession


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Pillar seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--log-level", default="warning",
                   help="debug | info | warning | error")
    return p.parse_args()


def draw_field(screen: pygame.Surface, session: GameSession, scale: float):
    """Draw one snapshot of the session, scaled from world to window pixels."""
    snap = session.snapshot()
    cfg = session.cfg

    def to_screen(x, y, w, h) -> pygame.Rect:
        return pygame.Rect(int(x * scale), int(y * scale), max(1, int(w * scale)), max(1, int(h * scale)))

    screen.fill(COLOR_BG)
    for pv in snap.pillars:
        pygame.draw.rect(screen, COLOR_PLAT, to_screen(pv.x, pv.y, pv.w, pv.h))

    # margins are drawn over the pillars, like the ground in front of them
    pygame.draw.rect(screen, COLOR_MARGIN, to_screen(0, 0, cfg.field_w, cfg.ceiling_y))
    pygame.draw.rect(screen, COLOR_MARGIN, to_screen(0, cfg.ground_y, cfg.field_w, cfg.field_h - cfg.ground_y))

    color_flyer = COLOR_DANGER if snap.phase is GamePhase.GAME_OVER else COLOR_ACCENT
    pygame.draw.rect(screen, color_flyer, to_screen(*snap.flyer))


def run():
    args = parse_args()
    setup_logging(args.log_level)

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # signals PillarGen to randomize
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("SkyHop")
    win_w, win_h = int(WIDTH * WINDOW_SCALE), int(HEIGHT * WINDOW_SCALE)
    screen = pygame.display.set_mode((win_w, win_h))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 32, bold=True)
    small = pygame.font.SysFont("jetbrainsmono", 18)

    session = GameSession(EngineConfig(), seed=launch_seed)
    session.events.subscribe(
        GameEvent.SESSION_ENDED,
        lambda ev: print(f"[GAME OVER] session={ev.session_id} score={ev.score} cause={session.end_cause}"),
    )

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    session.jump()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                session.jump()

        session.tick()

        # --- Render ---
        draw_field(screen, session, WINDOW_SCALE)

        hud = f"Score: {session.score}"
        screen.blit(font.render(hud, True, COLOR_FG), (12, 10))
        info = f"Seed: {session.seed}   Speed: {session.speed:.1f}   {session.phase.value.upper()}"
        screen.blit(small.render(info, True, (160, 180, 210)), (12, 48))

        if session.phase is GamePhase.IDLE:
            msg = "SPACE / click to start"
        elif session.phase is GamePhase.GAME_OVER:
            msg = f"Game over ({session.end_cause}) - SPACE / click to restart"
        else:
            msg = ""
        if msg:
            txt = font.render(msg, True, COLOR_FG)
            screen.blit(txt, ((win_w - txt.get_width()) // 2, (win_h - txt.get_height()) // 2))

        pygame.display.flip()

if __name__ == "__main__":
    run()
