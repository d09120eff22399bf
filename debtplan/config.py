from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Simulation
    max_simulation_months: int = 600  # Iteration ceiling for non-convergent debt sets
    default_payoff_method: str = "avalanche"
    default_payment_frequency: str = "monthly"
    default_billing_cycle_days: int = 30

    # What-if scenarios
    max_scenarios: int = 4


settings = Settings()
