import random
import unittest
from dataclasses import dataclass

from lockstep.math.fixed import Fix64
from lockstep.math.vec2 import FixedVec2, distance, fast_in_range, truncate

FIXED_DT = Fix64.ONE / 60
MAX_SPEED = Fix64.from_int(40)
TURN_RATE = Fix64.PI / 90
ARRIVE_RADIUS = Fix64.from_int(2)


@dataclass
class Agent:
    position: FixedVec2
    velocity: FixedVec2
    target: FixedVec2


def random_vec(rng: random.Random, low: int, high: int) -> FixedVec2:
    x = Fix64.from_raw(rng.randint(low << 32, high << 32))
    y = Fix64.from_raw(rng.randint(low << 32, high << 32))
    return FixedVec2(x, y)


def build_agents(seed: int) -> list[Agent]:
    rng = random.Random(seed)
    return [
        Agent(
            position=random_vec(rng, -50, 50),
            velocity=random_vec(rng, -20, 20),
            target=random_vec(rng, -50, 50),
        )
        for _ in range(8)
    ]


def step(agents: list[Agent]) -> None:
    for agent in agents:
        desired = (agent.target - agent.position).normalize() * MAX_SPEED
        steering = truncate(desired - agent.velocity, MAX_SPEED / 4)
        agent.velocity = truncate((agent.velocity + steering).rotate(TURN_RATE), MAX_SPEED)
        agent.position = agent.position + agent.velocity * FIXED_DT
        if fast_in_range(agent.position, agent.target, ARRIVE_RADIUS):
            agent.target = agent.target.rotate_left_90()


class DeterminismTests(unittest.TestCase):
    def test_same_seed_same_state(self) -> None:
        agents_a = build_agents(123)
        agents_b = build_agents(123)
        start = [agent.position for agent in agents_a]
        for _ in range(240):
            step(agents_a)
            step(agents_b)
        for agent_a, agent_b in zip(agents_a, agents_b, strict=True):
            self.assertEqual(agent_a.position.x.raw, agent_b.position.x.raw)
            self.assertEqual(agent_a.position.y.raw, agent_b.position.y.raw)
            self.assertEqual(agent_a.velocity, agent_b.velocity)
            self.assertEqual(agent_a.target, agent_b.target)
        self.assertNotEqual([agent.position for agent in agents_a], start)

    def test_speed_stays_clamped(self) -> None:
        agents = build_agents(7)
        for _ in range(120):
            step(agents)
        limit = MAX_SPEED + Fix64.from_raw(1 << 12)
        for agent in agents:
            self.assertLessEqual(agent.velocity.magnitude(), limit)
            self.assertLess(distance(agent.position, FixedVec2.ZERO), Fix64.from_int(200))


if __name__ == "__main__":
    unittest.main()
