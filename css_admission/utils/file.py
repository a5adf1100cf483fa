"""File utility for CSS Admission."""

import os
from .config import MAX_INPUT_FILE_SIZE
from .error import FileOperationError

def safe_write_file(file_path: str, content: str, encoding: str = 'utf-8') -> bool:
    """Safely write content to a file.
    
    Args:
        file_path: Path to the file
        content: Content to write
        encoding: File encoding
        
    Returns:
        True if successful
        
    Raises:
        FileOperationError: If file write fails
    """
    try:
        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(file_path, 'w', encoding=encoding) as f:
            f.write(content)
        return True
    except OSError as e:
        raise FileOperationError(f"Failed to write file {file_path}: {e}") from e

def safe_read_file(file_path: str, encoding: str = 'utf-8',
                   max_size: int = MAX_INPUT_FILE_SIZE) -> str:
    """Safely read content from a file.
    
    Args:
        file_path: Path to the file
        encoding: File encoding
        max_size: Largest accepted file size in bytes
        
    Returns:
        File content
        
    Raises:
        FileOperationError: If the file is missing, too large or unreadable
    """
    try:
        size = os.path.getsize(file_path)
    except OSError as e:
        raise FileOperationError(f"Failed to read file {file_path}: {e}") from e

    if size > max_size:
        raise FileOperationError(
            f"File too large (max {max_size} bytes): {file_path}"
        )

    try:
        with open(file_path, 'r', encoding=encoding) as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileOperationError(f"Failed to read file {file_path}: {e}") from e

# Exported functions
__all__ = ['safe_write_file', 'safe_read_file']
