from __future__ import annotations

import json

import pytest

from maze_game.config import GameConfig
from maze_game.ui import layout
from maze_game.ui.main import EXIT_PROMPT, MazeGameApp, level_keys

WINNING_KEYS = "waaddwwddwwaaw"


@pytest.fixture
def app(pygame_module, small_config):
    return MazeGameApp(small_config)


def press(pygame, app: MazeGameApp, code) -> None:
    app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=code))


def test_number_key_starts_unlocked_level(pygame_module, app):
    pygame = pygame_module

    press(pygame, app, pygame.K_1)

    assert app.mode == "play"
    assert app.session.current_level.level_number == 1
    assert app.messages == ["Level 1: find the key, then the exit."]


def test_locked_level_stays_on_map(pygame_module, app):
    pygame = pygame_module

    press(pygame, app, pygame.K_3)

    assert app.mode == "map"
    assert app.session.current_level is None
    assert "prerequisite" in app.messages[0]


def test_escape_quits_at_once_without_a_level_in_progress(pygame_module, app):
    pygame = pygame_module

    with pytest.raises(SystemExit):
        press(pygame, app, pygame.K_ESCAPE)


def test_escape_from_map_asks_before_quitting_unfinished_level(pygame_module, app):
    pygame = pygame_module
    press(pygame, app, pygame.K_1)

    press(pygame, app, pygame.K_ESCAPE)
    assert app.mode == "map"

    press(pygame, app, pygame.K_ESCAPE)
    assert app.mode == "confirm_exit"
    assert app.messages == [EXIT_PROMPT]


def test_exit_prompt_yes_saves_the_session(pygame_module, app, small_config):
    pygame = pygame_module
    press(pygame, app, pygame.K_1)
    press(pygame, app, pygame.K_UP)
    app.handle_event(pygame.event.Event(pygame.QUIT))
    assert app.mode == "confirm_exit"

    with pytest.raises(SystemExit):
        press(pygame, app, pygame.K_y)

    document = json.loads(small_config.save_path.read_text())
    assert document["currentLevel"]["levelNumber"] == 1
    assert document["isLevelInProgress"]
    assert document["resumedGame"]


def test_exit_prompt_no_clears_the_save_file(pygame_module, app, small_config):
    pygame = pygame_module
    press(pygame, app, pygame.K_1)
    press(pygame, app, pygame.K_F5)
    assert "currentLevel" in json.loads(small_config.save_path.read_text())
    press(pygame, app, pygame.K_ESCAPE)
    press(pygame, app, pygame.K_ESCAPE)

    with pytest.raises(SystemExit):
        press(pygame, app, pygame.K_n)

    assert json.loads(small_config.save_path.read_text()) == {}


def test_exit_prompt_escape_cancels(pygame_module, app, small_config):
    pygame = pygame_module
    press(pygame, app, pygame.K_1)
    app.handle_event(pygame.event.Event(pygame.QUIT))
    press(pygame, app, pygame.K_UP)
    assert app.mode == "confirm_exit"

    press(pygame, app, pygame.K_ESCAPE)

    assert app.mode == "play"
    assert app.messages == ["Exit cancelled."]
    assert not small_config.save_path.exists()


def test_level_keys_follow_level_count(pygame_module):
    pygame = pygame_module

    assert level_keys(3) == {pygame.K_1: 1, pygame.K_2: 2, pygame.K_3: 3}
    assert len(level_keys(12)) == 9
    assert level_keys(12)[pygame.K_9] == 9


def test_number_key_starts_levels_beyond_three(pygame_module, tmp_path):
    pygame = pygame_module
    config = GameConfig(maze_size=7, level_count=5, save_path=tmp_path / "save.json", seed=1)
    app = MazeGameApp(config)
    app.session.set_progress([True] * 5)

    press(pygame, app, pygame.K_1 + 4)

    assert app.mode == "play"
    assert app.session.current_level.level_number == 5


def test_next_level_key_walks_through_levels(pygame_module, app, make_level):
    pygame = pygame_module
    press(pygame, app, pygame.K_n)
    assert app.session.current_level.level_number == 1

    press(pygame, app, pygame.K_ESCAPE)
    press(pygame, app, pygame.K_n)
    assert app.mode == "map"
    assert "prerequisite" in app.messages[0]

    app.session.resume(make_level(1, key=(1, 5)))
    app.mode = "play"
    for letter in WINNING_KEYS:
        press(pygame, app, getattr(pygame, f"K_{letter}"))
    press(pygame, app, pygame.K_n)

    assert app.mode == "play"
    assert app.session.current_level.level_number == 2


def test_next_level_key_after_last_level(pygame_module, app):
    pygame = pygame_module
    app.session.set_progress([True, True, True])
    app.session.start_level(3)
    app.session.current_level.mark_completed()
    app.session.level_in_progress = False

    press(pygame, app, pygame.K_n)

    assert app.mode == "map"
    assert app.messages == ["All levels completed!"]


def test_finishing_level_unlocks_next_and_shows_map(pygame_module, app, make_level):
    pygame = pygame_module
    app.session.resume(make_level(1, key=(1, 5)))
    app.mode = "play"

    for letter in WINNING_KEYS:
        press(pygame, app, getattr(pygame, f"K_{letter}"))

    assert app.mode == "map"
    assert app.session.progress == [True, False, False]
    assert "Congratulations! You have completed the level!" in app.messages

    press(pygame, app, pygame.K_2)
    assert app.mode == "play"
    assert app.session.current_level.level_number == 2


def test_reset_key_regenerates_level(pygame_module, app, make_level):
    pygame = pygame_module
    level = make_level(1, key=(3, 5))
    app.session.resume(level)
    app.mode = "play"
    press(pygame, app, pygame.K_UP)
    assert level.player.has_key()

    press(pygame, app, pygame.K_r)

    assert app.messages == ["Level reset."]
    assert level.player.position == level.entrance
    assert not level.player.has_key()


def test_save_then_load_resumes_play(pygame_module, app, small_config):
    pygame = pygame_module
    press(pygame, app, pygame.K_1)
    press(pygame, app, pygame.K_F5)
    assert small_config.save_path.exists()
    saved_level = app.session.current_level

    fresh = MazeGameApp(small_config, load_saved=True)

    assert fresh.mode == "play"
    assert fresh.session.current_level == saved_level
    assert fresh.messages == ["Resuming Level 1..."]


def test_load_without_save_reports_it(pygame_module, app):
    pygame = pygame_module

    press(pygame, app, pygame.K_l)

    assert app.mode == "map"
    assert app.messages == ["No saved game found."]


def test_draw_paints_board_in_play_mode(pygame_module, app, make_level):
    level = make_level(1, key=(1, 5))
    app.session.resume(level)
    app.mode = "play"

    app.draw()

    board_x, board_y, _, _ = app.geometry.board
    x, y = level.player.position
    centre = (
        board_x + x * layout.TILE_SIZE + layout.TILE_SIZE // 2,
        board_y + y * layout.TILE_SIZE + layout.TILE_SIZE // 2,
    )
    assert tuple(app.screen.get_at(centre))[:3] == layout.PLAYER_COLOR


def test_draw_level_map(pygame_module, app):
    app.session.set_progress([True])

    app.draw()

    assert app.screen.get_size() == app.geometry.window


def test_draw_keeps_board_behind_exit_prompt(pygame_module, app, make_level):
    pygame = pygame_module
    level = make_level(1, key=(1, 5))
    app.session.resume(level)
    app.mode = "play"
    app.handle_event(pygame.event.Event(pygame.QUIT))

    app.draw()

    board_x, board_y, _, _ = app.geometry.board
    x, y = level.player.position
    centre = (
        board_x + x * layout.TILE_SIZE + layout.TILE_SIZE // 2,
        board_y + y * layout.TILE_SIZE + layout.TILE_SIZE // 2,
    )
    assert app.mode == "confirm_exit"
    assert tuple(app.screen.get_at(centre))[:3] == layout.PLAYER_COLOR
