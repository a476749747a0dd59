import os, sys
from pathlib import Path

# Add src/ to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# Keep the OpenAI client constructible without a real key
os.environ.setdefault("OPENAI_API_KEY", "test-openai")
