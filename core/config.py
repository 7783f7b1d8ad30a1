import tomli
from pydantic import BaseModel


class StorageConfig(BaseModel):
    backend: str = "sqlite"
    db_path: str = "~/.helix/store.db"
    key: str = "devagent_db_v1"
    max_entries: int = 100


class LLMLocalConfig(BaseModel):
    base_url: str = "http://localhost:8000/v1"
    model: str = "mistralai/Mistral-Nemo-Instruct-2407"


class LLMApiConfig(BaseModel):
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    api_key_env: str = "HELIX_API_KEY"


class LLMConfig(BaseModel):
    backend: str = "api"
    default_framework: str = "pytest"
    local: LLMLocalConfig = LLMLocalConfig()
    api: LLMApiConfig = LLMApiConfig()


class ChatConfig(BaseModel):
    error_message: str = (
        "Sorry, I encountered an error connecting to the neural network. Please try again."
    )


class ExplorerConfig(BaseModel):
    read_error_placeholder: str = "Error reading file."
    ignored_dirs: list[str] = [".git", "node_modules", "__pycache__", ".venv"]


class Config(BaseModel):
    storage: StorageConfig = StorageConfig()
    llm: LLMConfig = LLMConfig()
    chat: ChatConfig = ChatConfig()
    explorer: ExplorerConfig = ExplorerConfig()


def load_config(path: str = "config/default.toml") -> Config:
    """Load config from TOML file, validate with Pydantic."""
    with open(path, "rb") as f:
        data = tomli.load(f)
    return Config(**data)
