"""
User-facing message templates for the Telegram bot
"""
from .config import MAX_PROMPT_LENGTH, TEAM_NAME
from .errors import ValidationError

TEAM_ATTRIBUTION = f"Developed by {TEAM_NAME}"


def _signed(text: str) -> str:
    return f"{text}\n\n{TEAM_ATTRIBUTION}"


WELCOME_MESSAGE = _signed(
    "🎨 Welcome to the AI Image Generator Bot!\n\n"
    "Send me any text description and I'll create a beautiful image for you using AI.\n\n"
    "Commands:\n"
    "/start - Get started\n"
    "/help - View help\n\n"
    "Simply type your image description and I'll generate it for you!"
)

HELP_MESSAGE = _signed(
    "📖 How to use the AI Image Generator Bot:\n\n"
    "1️⃣ Simply send me a text description\n"
    "2️⃣ Wait for the AI to generate your image\n"
    "3️⃣ Download or share your creation\n\n"
    "Tips for better results:\n"
    "• Be descriptive with details\n"
    "• Mention colors, styles, moods\n"
    "• Specify composition (wide, portrait, etc.)\n\n"
    "Commands:\n"
    "/start - Restart bot\n"
    "/help - Show this help\n\n"
    "Examples:\n"
    "\"A majestic sunset over a mountain landscape with purple clouds\"\n"
    "\"A futuristic city with flying cars at night\"\n"
    "\"Abstract art with vibrant colors and geometric shapes\""
)

GENERATION_FAILED_MESSAGE = _signed(
    "❌ Image Generation Failed\n\n"
    "Sorry, I couldn't generate your image right now. This could be due to:\n"
    "• Server overload\n"
    "• Network issues\n"
    "• Content policy restrictions\n\n"
    "Please try again in a few moments or rephrase your description."
)

UNEXPECTED_ERROR_MESSAGE = _signed("❌ Something went wrong. Please try again later.")

REJECTION_MESSAGES = {
    ValidationError.TOO_SHORT: _signed("❌ Please provide a more detailed description for better results."),
    ValidationError.TOO_LONG: _signed(
        f"❌ Description is too long. Please keep it under {MAX_PROMPT_LENGTH} characters."
    ),
    ValidationError.CONTENT_POLICY: _signed(
        "⚠️ Content Policy Violation\n\n"
        "I cannot generate inappropriate or harmful content. Please provide a different "
        "description that follows our content guidelines."
    ),
}


def get_rejection_message(reason: str) -> str:
    return REJECTION_MESSAGES.get(reason, UNEXPECTED_ERROR_MESSAGE)


def get_generating_message(prompt: str) -> str:
    return _signed(f"🎨 Generating your image...\n\n\"{prompt}\"\n\nThis may take a few seconds...")


def get_success_caption(prompt: str) -> str:
    return _signed(f"✨ Here's your AI-generated image!\n\nPrompt: \"{prompt}\"\nGenerated successfully ⚡")
