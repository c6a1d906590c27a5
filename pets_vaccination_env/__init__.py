from gymnasium.envs.registration import register

register(
     id='PetsVaccination-v0',
     entry_point='pets_vaccination_env.envs:PetsVaccinationEnv',
)
