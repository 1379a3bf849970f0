from arc_agi import Arcade, OperationMode
from arcengine import GameAction

arc = Arcade(
    operation_mode=OperationMode.OFFLINE,
    environments_dir="./environment_files"
)

env = arc.make("cp01-v1", render_mode="terminal")

print(env.action_space)

# Level 1 is a straight corridor
for _ in range(3):
    env.step(GameAction.ACTION4)

print(arc.get_scorecard())
