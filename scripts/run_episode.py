# scripts/run_episode.py

import gymnasium as gym
import traceback

# Import the environment package to register it
import pets_vaccination_env
from pets_vaccination_env.planning.solver import VaccinationSolver

# --- Run Configuration ---
ENV_ID = "PetsVaccination-v0"
SCENARIO_FILE = "classic.yaml"
USE_PLANNER = True  # False: sample random legal actions instead of following the solver plan
SEED = 0

if __name__ == "__main__":
    print("Creating environment...")
    env = None
    try:
        env = gym.make(ENV_ID, render_mode="ansi", scenario_file=SCENARIO_FILE)
        base_env = env.unwrapped
        print(f"Observation Space: {env.observation_space}")
        print(f"Action Space: {env.action_space}")

        obs, info = env.reset(seed=SEED)
        print(f"Reset complete. Observation: {obs}, State: {info['state']}")

        if USE_PLANNER:
            solution = VaccinationSolver(base_env.puzzle).solve()
            if solution is None:
                print("Planner found no solution, nothing to replay.")
                actions = []
            else:
                actions = base_env.plan_actions(solution)
        else:
            actions = None

        total_reward = 0.0
        i = 0
        while True:
            if actions is None:
                legal = info["action_mask"].nonzero()[0]
                if len(legal) == 0:
                    print("No legal action left.")
                    break
                action = int(base_env.np_random.choice(legal))
            elif i < len(actions):
                action = actions[i]
            else:
                break

            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            i += 1
            print(f"Step {i}, Action: {base_env.moves[action]}")
            print(f"  -> Reward: {reward:.3f}, Term: {terminated}, Trunc: {truncated}, State: {env.render()}")
            if terminated or truncated:
                print("Episode ended.")
                break

        print(f"Goal reached: {info['is_goal']}, total reward: {total_reward:.3f}")

    except Exception:
        print("\n!!!!!! An error occurred during the episode !!!!!!")
        print(traceback.format_exc())
    finally:
        if env is not None:
            env.close()
            print("Environment closed.")
