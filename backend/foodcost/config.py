from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "foodcost"
    env: str = "local"
    log_level: str = "INFO"

    database_dsn: str = "sqlite:///foodcost.db"
    # Fixed storage keys for the two persisted collections
    ingredients_store_key: str = "foodcost_ingredients"
    recipes_store_key: str = "foodcost_recipes"
    seed_default_catalog: bool = True

    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_api_key: str = ""
    llm_temperature: float = 0.2
    llm_timeout_s: int = 30
    llm_max_tokens: int = 2048

    default_servings: int = 4
    default_overhead_percentage: float = 10.0
    default_target_food_cost_percentage: float = 30.0

    # Dashboard counts a recipe as profitable above this margin (percent).
    profitable_margin_threshold: float = 20.0
    currency_label: str = "Rp"

    class Config:
        env_file = ".env"


settings = Settings()
