from pets_vaccination_env.envs.vaccination_env import PetsVaccinationEnv
