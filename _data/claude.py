BASE_URL: str = "https://api.anthropic.com/v1"
MESSAGES_URL: str = f"{BASE_URL}/messages"

API_VERSION: str = "2023-06-01"
MODEL: str = "claude-3-7-sonnet-20250219"
MAX_TOKENS: int = 1024
TEMPERATURE: float = 0.5

# Seconds
CONNECT_TIMEOUT: float = 10
TOTAL_TIMEOUT: float = 120

# Relative to the user's home directory
DEFAULT_CONFIG_DIR: str = ".config/claude"
DEFAULT_FILES: dict = {
    "api_key": "api_key.txt",
    "profile": "profile.txt",
}

USER_PROMPT_TEMPLATE: str = (
    "Here is my profile:\n\n{profile}\n\n"
    "Here is a git diff that needs review:\n\n{diff}\n\n"
    "Please provide a concise title and description of the changes."
)

# Bytes per read while streaming the response body
READ_CHUNK_SIZE: int = 8192
