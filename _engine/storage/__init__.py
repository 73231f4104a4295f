from .files_controller import (
    file_exists,
    read_text,
    read_api_key,
    resolve_default_path,
    save_results,
)
