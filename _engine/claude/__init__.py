from .accumulator import ResponseAccumulator
from .parser import extract_completion_text, parse_response, split_title_description
from .pipeline import generate_title_description
from .request import build_request, render_prompt, serialize_request
from .transport import HttpTransport
