import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT
from .entities import Difficulty, GameState
from .render import buttons_for, draw_frame, make_fonts
from .session import Session

def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Layout seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--difficulty", type=str, default=None,
                   help="Skip the menu and start right away: easy, medium or hard.")
    p.add_argument("--log-level", type=str, default="WARNING")
    return p.parse_args()

def handle_click(session: Session, pos):
    for btn in buttons_for(session.state, WIDTH):
        if not btn.rect.collidepoint(pos):
            continue
        if btn.action == "start":
            session.start_game(btn.difficulty)
        elif btn.action == "retry":
            session.retry()
        elif btn.action == "menu":
            session.go_to_menu()
        return True
    return False

def run():
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        seed = SEED_DEFAULT
    elif args.seed == -1:
        seed = None
    else:
        seed = args.seed

    pygame.init()
    pygame.display.set_caption("Gravity Flip Runner")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    fonts = make_fonts()

    session = Session(WIDTH, HEIGHT, seed=seed)
    if args.difficulty:
        session.start_game(Difficulty.parse(args.difficulty))

    while True:
        # one simulation step per rendered frame, whatever the wall-clock delta
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key in (K_SPACE, K_UP):
                    session.flip()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if session.state is GameState.PLAYING:
                    session.flip()
                else:
                    handle_click(session, event.pos)

        session.tick()

        draw_frame(screen, session.snapshot(), fonts, pygame.mouse.get_pos())
        pygame.display.flip()

if __name__ == "__main__":
    run()
