import gymnasium as gym
import numpy as np
import pytest

import pets_vaccination_env
from pets_vaccination_env.envs import PetsVaccinationEnv
from pets_vaccination_env.errors import InvalidAnimalCountError, InvalidConfigurationError
from pets_vaccination_env.planning.solver import VaccinationSolver
from pets_vaccination_env.planning.state import VaccinationMove

ENV_ID = "PetsVaccination-v0"


@pytest.fixture
def env():
    env = PetsVaccinationEnv()
    yield env
    env.close()


def test_spaces_and_reset(env):
    assert env.action_space.n == 4
    assert env.observation_space.shape == (6,)

    obs, info = env.reset(seed=0)
    assert obs.tolist() == [3, 3, 0, 0, 0, 0]
    assert env.observation_space.contains(obs)
    assert info["is_goal"] is False
    assert info["action_mask"].tolist() == [0, 1, 0, 1]


def test_step_before_reset_fails(env):
    with pytest.raises(RuntimeError):
        env.step(1)


def test_planner_solution_reaches_goal(env):
    env.reset()
    solution = VaccinationSolver(env.puzzle).solve()
    actions = env.plan_actions(solution)
    assert actions == [1, 1, 1]

    for i, action in enumerate(actions):
        obs, reward, terminated, truncated, info = env.step(action)
        if i < len(actions) - 1:
            assert not terminated
            assert reward == pytest.approx(env.step_penalty)

    assert terminated and not truncated
    assert reward == pytest.approx(env.goal_reward)
    assert obs.tolist() == [0, 3, 3, 0, 3, 3]
    assert info["is_goal"]


def test_unsafe_and_unknown_actions_leave_state_unchanged(env):
    obs, _ = env.reset()

    new_obs, reward, terminated, truncated, info = env.step(2)  # 3 chihuahuas left with 2 cats
    assert info["error"] == "invalid_move"
    assert np.array_equal(new_obs, obs)
    assert reward == pytest.approx(env.step_penalty + env.move_fail_penalty)
    assert not terminated

    new_obs, _, _, _, info = env.step(9)
    assert info["error"] == "invalid_action"
    assert np.array_equal(new_obs, obs)


def test_dead_end_terminates():
    env = PetsVaccinationEnv(scenario_file="outnumbered.yaml")
    env.reset()
    _, _, terminated, _, info = env.step(2)
    assert not terminated
    _, reward, terminated, _, info = env.step(3)
    assert terminated
    assert info["dead_end"] and not info["is_goal"]
    assert reward == pytest.approx(env.step_penalty)


def test_truncation_from_config():
    env = PetsVaccinationEnv(config={"simulation": {"max_episode_steps": 2}})
    env.reset()
    assert not env.step(0)[3]
    assert env.step(0)[3]


def test_config_overrides_and_reset_options():
    env = PetsVaccinationEnv(config={"puzzle": {"initial_chihuahuas": 1, "initial_cats": 5, "batch_size": 3}})
    assert env.action_space.n == 6
    obs, _ = env.reset(options={"state": (1, 3, 0, 2, 0, 3)})
    assert obs.tolist() == [1, 3, 0, 2, 0, 3]
    assert env.action_for_move(VaccinationMove(1, 2, 0, 1)) == 1
    _, reward, terminated, _, _ = env.step(1)
    assert terminated
    assert reward == pytest.approx(env.goal_reward)


def test_render_modes():
    env = PetsVaccinationEnv(render_mode="ansi")
    env.reset()
    assert env.render().startswith("Waiting: 3 Chihuahua 3 Cat")
    assert PetsVaccinationEnv().render() is None
    with pytest.raises(ValueError):
        PetsVaccinationEnv(render_mode="rgb_array")


def test_registered_env():
    env = gym.make(ENV_ID, scenario_file="cats_only.yaml")
    obs, _ = env.reset(seed=1)
    assert obs.tolist() == [0, 4, 0, 0, 0, 0]
    _, _, terminated, _, _ = env.step(0)
    assert not terminated
    _, reward, terminated, _, info = env.step(0)
    assert terminated and info["is_goal"]
    env.close()


def test_reset_from_returned_observation(env):
    env.reset()
    obs, *_ = env.step(1)
    assert obs.dtype == np.int64

    restored, info = env.reset(options={"state": obs})
    assert np.array_equal(restored, obs)
    assert env.state.key == (2, 3, 1, 0, 1, 1)
    assert all(type(count) is int for count in env.state.key)
    assert info["action_mask"].tolist() == env.action_mask().tolist()


def test_reset_rejects_counts_above_observation_bound(env):
    high = int(env.observation_space.high[0])
    with pytest.raises(InvalidAnimalCountError):
        env.reset(options={"state": (0, 0, 3, 3, high + 1, 0)})
    with pytest.raises(InvalidAnimalCountError):
        env.reset(options={"state": (3, 3, 0, 0, -1, 0)})


def test_null_config_sections_use_defaults():
    env = PetsVaccinationEnv(config={"logging": None, "simulation": None, "reward": None})
    # deep_merge replaces the base sections with None
    assert env.config["reward"] is None
    assert env.max_steps == 4 * env.puzzle.total_population
    assert env.goal_reward == pytest.approx(1.0)
    assert env.step_penalty == pytest.approx(-0.01)


def test_non_mapping_config_section_fails():
    with pytest.raises(InvalidConfigurationError):
        PetsVaccinationEnv(config={"reward": 5})


def test_human_render_prints_state(capsys):
    env = PetsVaccinationEnv(render_mode="human")
    env.reset()
    assert env.render() is None
    out = capsys.readouterr().out.splitlines()
    # reset() renders once, the explicit call once more
    assert out == [str(env.state), str(env.state)]
