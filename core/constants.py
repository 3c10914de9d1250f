"""
Constants and configuration values for note export.
"""

# Indent unit for the linearized outline (one per depth level)
OUTLINE_INDENT = '  '
OUTLINE_BULLET = '- '

# Report colors per status: background fill and left accent line
STATUS_COLORS = {
    'default': {'bg': '#FEFDE8', 'border': '#FACC15'},
    'important': {'bg': '#F0FDF4', 'border': '#34D399'},
    'crucial': {'bg': '#FEF2F2', 'border': '#F87171'},
}

# Report geometry, in points
REPORT_LAYOUT = {
    'margin': 30,
    'top_margin': 40,
    'indent_width': 20,
    'text_offset': 15,
    'trunk_offset': 8,
    'cell_padding': 8,
    'tick_drop': 12,
    'separator_gap': 5,
    'separator_inset': 10,
}

# Connector and separator strokes
TREE_LINE_COLOR = (180 / 255, 180 / 255, 180 / 255)
TREE_LINE_WIDTH = 0.5
SEPARATOR_COLOR = (0, 0, 0)
TEXT_COLOR = (51 / 255, 51 / 255, 51 / 255)

# Flashcard prompt template; {notes} receives the linearized outline
FLASHCARD_PROMPT_TEMPLATE = (
    "You are an expert study assistant. Your task is to convert a list of "
    "hierarchical notes into a text format suitable for importing into "
    "flashcard apps like Quizlet or Knowt. Use a tab character as a separator "
    "between the question (term) and the answer (definition). Each new "
    "flashcard must be on a new line.\n"
    "\n"
    "For each main note, create a clear question. Use its sub-notes to form a "
    "comprehensive answer. If a note has no sub-notes, create a relevant "
    "question and a simple answer based on its content.\n"
    "\n"
    "Here are the notes:\n"
    "{notes}\n"
)

FLASHCARD_EMPTY_MESSAGE = "Sorry, could not generate flashcards from the provided notes."
FLASHCARD_ERROR_PREFIX = "An error occurred: "

# Default viewer rendering parameters
DEFAULT_VIEWER_PARAMS = {
    'target_dpi': 150,
    'max_image_size': 2048
}
