"""Bundled level catalog."""

from __future__ import annotations

from gridcoder.models import LevelDefinition, LevelMap, RuleCriterion, StateCriterion, TileKind

BASE_LEGEND: dict[str, TileKind] = {
    ".": TileKind.EMPTY,
    "#": TileKind.WALL,
    "C": TileKind.COIN,
    "P": TileKind.PLAYER,
    "D": TileKind.DOOR,
    "K": TileKind.KEY,
    "E": TileKind.HAZARD,
}

MOVES = ("move_right", "move_left", "move_up", "move_down")


def _grid(*rows: str) -> LevelMap:
    return LevelMap(rows=len(rows), cols=len(rows[0]), tiles=rows, legend=dict(BASE_LEGEND))


LEVELS: tuple[LevelDefinition, ...] = (
    LevelDefinition(
        id="lvl-001-move-intro",
        title="A coin nearby",
        story="The hero woke up and spotted a coin. Reach it with simple steps.",
        map=_grid(
            "..........",
            "..........",
            "..........",
            "...C......",
            "..........",
            "..P.......",
            "..........",
            "..........",
            "..........",
            "..........",
        ),
        goals=("Reach the coin", "Pick up the coin"),
        api=(*MOVES, "pick", "print"),
        teaching=("movement", "sequence"),
        starter_code="# Try to reach the coin!\n",
        tests=(StateCriterion(must_have={"collected_coins": 1}), RuleCriterion(name="no_collision")),
        hints=(
            "Look where the hero and the coin are.",
            "Go up first, then step right.",
            "Don't forget pick() on the coin tile.",
            "Example: move_up(); move_up(); move_right(); pick()",
        ),
        solution="move_up()\nmove_up()\nmove_right()\npick()\n",
        hero_stars=("no collisions", "fast", "no hints"),
    ),
    LevelDefinition(
        id="lvl-002-maze",
        title="Winding corridor",
        story="A short maze lies ahead. Walk carefully and don't hit a wall.",
        map=_grid(
            "########..",
            "P......#..",
            ".####..#..",
            ".#..C.#...",
            ".#..####..",
            ".#........",
            ".#########",
            "..........",
            "..........",
            "..........",
        ),
        goals=("Reach the coin", "Avoid the walls"),
        api=(*MOVES, "pick", "print"),
        teaching=("movement", "mistakes"),
        starter_code="# Walk the corridor to the coin\n",
        tests=(StateCriterion(must_have={"collected_coins": 1}), RuleCriterion(name="no_collision")),
        hints=(
            "Look at the corridor: go right until you see a way down.",
            "When the tile below is free, go down and turn towards the coin.",
            "Step left onto the coin and call pick().",
            "Reference: right x5, down x2, left, pick()",
        ),
        solution=(
            "move_right()\nmove_right()\nmove_right()\nmove_right()\nmove_right()\n"
            "move_down()\nmove_down()\nmove_left()\npick()\n"
        ),
    ),
    LevelDefinition(
        id="lvl-003-variables",
        title="Steps in a box",
        story="The hero keeps a number of steps in a variable. Reach the coin!",
        map=_grid(
            "..........",
            "..#.......",
            "..........",
            "..#.......",
            "..#.......",
            "..P..C....",
            "..........",
            "..........",
            "..........",
            "..........",
        ),
        goals=("Pick up the coin", "Don't hit a wall"),
        api=(*MOVES, "pick", "say", "print"),
        teaching=("variables", "integers"),
        starter_code="steps = 3\n# Walk steps tiles to the right\n",
        tests=(StateCriterion(must_have={"collected_coins": 1}), RuleCriterion(name="no_collision")),
        hints=(
            "The variable steps holds a number.",
            "Repeat a step to the right steps times.",
            "You can use a loop or write the commands one after another.",
            "Example solution: a for loop and the pick() command",
        ),
        solution="steps = 3\nfor _ in range(steps):\n    move_right()\npick()\n",
    ),
    LevelDefinition(
        id="lvl-004-types",
        title="Hello, coin!",
        story="Teach the hero to say hello and pick up the coin.",
        map=_grid(
            "..........",
            "..........",
            "....C.....",
            "..........",
            "...P......",
            "..........",
            "..........",
            "..........",
            "..........",
            "..........",
        ),
        goals=('Say "Hello"', "Pick up the coin"),
        api=(*MOVES, "pick", "say", "print"),
        teaching=("strings", "print"),
        starter_code='# Use say("Hello") and the movement commands\n',
        tests=(StateCriterion(must_have={"collected_coins": 1}), RuleCriterion(name="said_hi")),
        hints=(
            'The command say("Hello") shows what the hero says.',
            "Step right and go up twice.",
            "When the hero stands on the coin, call pick().",
            'Reference: say("Hello"); move_right(); move_up() x2; pick()',
        ),
        solution='say("Hello")\nmove_right()\nmove_up()\nmove_up()\npick()\n',
    ),
    LevelDefinition(
        id="lvl-005-if",
        title="Turn at the wall",
        story="The corridor has a turn. Decide where to go when a wall is ahead.",
        map=_grid(
            "#####.....",
            "P..#......",
            "#..#......",
            "#..#..C...",
            "#..#####..",
            "#.........",
            "#########.",
            "..........",
            "..........",
            "..........",
        ),
        goals=("Use if", "Pick up the coin"),
        api=(*MOVES, "pick", "say", "print", "is_wall_ahead"),
        teaching=("conditions",),
        starter_code="# When a wall is in front of the hero, change direction.\n",
        tests=(StateCriterion(must_have={"collected_coins": 1}), RuleCriterion(name="used_if")),
        hints=(
            "Check is_wall_ahead() first.",
            "When there is a wall ahead, go down to the free lane.",
            "Walk right to the opening and go up to the coin.",
            "Reference:\nmove_right()\nmove_right()\nif is_wall_ahead():\n    move_down()\n    move_down()\n"
            "move_down()\nmove_down()\nfor _ in range(6):\n    move_right()\n"
            "move_up()\nmove_up()\nmove_left()\nmove_left()\npick()",
        ),
        solution=(
            "move_right()\nmove_right()\nif is_wall_ahead():\n    move_down()\n    move_down()\n"
            "move_down()\nmove_down()\n"
            "move_right()\nmove_right()\nmove_right()\nmove_right()\nmove_right()\nmove_right()\n"
            "move_up()\nmove_up()\nmove_left()\nmove_left()\npick()\n"
        ),
    ),
    LevelDefinition(
        id="lvl-006-for-loop",
        title="Four steps forward",
        story="The corridor looks the same all the way. Repeat the steps with a for loop.",
        map=_grid(
            "..........",
            "..........",
            "..........",
            "..........",
            "..........",
            "P...C.....",
            "..........",
            "..........",
            "..........",
            "..........",
        ),
        goals=("Use a for loop", "Pick up the coin"),
        api=(*MOVES, "pick", "print"),
        teaching=("for loops",),
        starter_code="# Repeat the move four times\n",
        tests=(StateCriterion(must_have={"collected_coins": 1}), RuleCriterion(name="used_for")),
        hints=(
            "The loop for i in range(4) repeats a command four times.",
            "Move right inside the loop.",
            "Pick up the coin after the loop.",
            "The reference solution uses a for loop.",
        ),
        solution="for _ in range(4):\n    move_right()\npick()\n",
    ),
    LevelDefinition(
        id="lvl-007-while-loop",
        title="To the door",
        story="Walk on until you see the door. Don't get stuck!",
        map=_grid(
            "..........",
            "..........",
            "..........",
            "..........",
            "..........",
            "P..K.D....",
            "..........",
            "..........",
            "..........",
            "..........",
        ),
        goals=("Use while", "Reach the door", "Take the key"),
        api=(*MOVES, "open", "pick", "print", "at_goal", "see_item"),
        teaching=("while loops",),
        starter_code="# Walk until you reach the door. Remember to limit the loop.\nsteps = 0\n",
        tests=(
            StateCriterion(must_have={"opened_door": True, "collected_coins": 0}),
            RuleCriterion(name="loop_guard"),
        ),
        hints=(
            "Check at_goal() inside the while loop.",
            "Add a steps counter so the loop can stop.",
            "Walk right until the key is next to you, take it and open the door.",
            'Reference:\nwhile not see_item("right") and steps < 12:\n    move_right()\n    steps += 1\n'
            "move_right()\npick()\nwhile not at_goal() and steps < 24:\n    move_right()\n    steps += 1\nopen()",
        ),
        solution=(
            'steps = 0\nwhile not see_item("right") and steps < 12:\n    move_right()\n    steps += 1\n'
            "move_right()\nsteps += 1\npick()\n"
            "while not at_goal() and steps < 24:\n    move_right()\n    steps += 1\nopen()\n"
        ),
    ),
    LevelDefinition(
        id="lvl-008-functions",
        title="Staircase dance",
        story="Write a function that steps up and to the right. Call it again and again.",
        map=_grid(
            "..........",
            "..........",
            "..........",
            "..........",
            "....C.....",
            "..........",
            "..........",
            "P.........",
            "..........",
            "..........",
        ),
        goals=("Write a function", "Call the function several times", "Pick up the coin"),
        api=MOVES + ("pick",),
        teaching=("functions",),
        starter_code="# Write a step-up-right function and call it\n",
        tests=(StateCriterion(must_have={"collected_coins": 1}), RuleCriterion(name="used_def")),
        hints=(
            "Write a function with def.",
            "Call move_right() and move_up() inside it.",
            "Call it a few times and take the coin.",
            "Reference:\ndef step_up_right():\n    move_right()\n    move_up()\n"
            "step_up_right(); step_up_right(); step_up_right(); move_right(); pick()",
        ),
        solution=(
            "def step_up_right():\n    move_right()\n    move_up()\n\n"
            "step_up_right()\nstep_up_right()\nstep_up_right()\nmove_right()\npick()\n"
        ),
    ),
    LevelDefinition(
        id="lvl-009-combo",
        title="Three coins and a door",
        story="Use variables, loops and conditions to collect the coins and open the door.",
        map=_grid(
            "..........",
            "P.C.C.CKD.",
            "..........",
            "..........",
            "..........",
            "..........",
            "..........",
            "..........",
            "..........",
            "..........",
        ),
        goals=("Collect three coins", "Take the key and open the door"),
        api=(*MOVES, "pick", "open", "is_wall_ahead", "print", "say"),
        teaching=("variables", "loops", "conditions"),
        starter_code="# Collect the coins and open the door\ncoins = 0\n",
        tests=(
            StateCriterion(must_have={"collected_coins": 3, "opened_door": True}),
            RuleCriterion(name="used_mix"),
        ),
        hints=(
            "Track the number of coins in a variable.",
            "Use a loop and a condition to react to each step of the path.",
            "Take the key before the door and call open().",
            'Reference:\ncoins = 0\nsteps = ["right", "right", "pick", ... , "open"]\n'
            "for action in steps: on right call move_right(), on pick call pick() and count, on open call open()",
        ),
        solution=(
            "coins = 0\n"
            'steps = ["right", "right", "pick", "right", "right", "pick", "right", "right", "pick", '
            '"right", "pick", "right", "open"]\n'
            "for action in steps:\n"
            '    if action == "right":\n'
            "        move_right()\n"
            '    elif action == "pick":\n'
            "        pick()\n"
            "        if coins < 3:\n"
            "            coins += 1\n"
            '    elif action == "open":\n'
            "        open()\n"
        ),
    ),
    LevelDefinition(
        id="lvl-010-debug",
        title="Debugging",
        story="There is a bug hidden in the hero's code. Find and fix it using the hints.",
        map=_grid(
            "..........",
            "..C.......",
            "..........",
            "..........",
            "..........",
            "..PK.D....",
            "..........",
            "..........",
            "..........",
            "..........",
        ),
        goals=("Fix the bug", "Pick up the coin", "Open the door"),
        api=(*MOVES, "pick", "open", "print"),
        teaching=("debugging",),
        starter_code=(
            "# Fix it: the hero never reaches the door\n"
            "move_right()\nmove_up()\nmove_up()\npick()\nmove_right()\nmove_right()\nopen()\n"
        ),
        tests=(
            StateCriterion(must_have={"collected_coins": 1, "opened_door": True}),
            RuleCriterion(name="no_collision"),
        ),
        hints=(
            "Compare the hero's path with the map.",
            "Plan the route: the coin first, then the key, then the door.",
            "Don't forget to take the key before the door.",
            "Reference:\nmove_up() x4, pick(), then four steps down, move_right(), pick(), "
            "two more steps right and open()",
        ),
        solution=(
            "move_up()\nmove_up()\nmove_up()\nmove_up()\npick()\n"
            "move_down()\nmove_down()\nmove_down()\nmove_down()\n"
            "move_right()\npick()\nmove_right()\nmove_right()\nopen()\n"
        ),
    ),
)


def get_level(level_id: str) -> LevelDefinition:
    for level in LEVELS:
        if level.id == level_id:
            return level
    raise KeyError(f"Unknown level id: {level_id}")
