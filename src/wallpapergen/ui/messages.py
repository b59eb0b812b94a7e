"""Localized user-facing strings.

Korean is the default locale; English is available through
``WALLPAPERGEN_LOCALE=en``.  Unknown keys fall back to English and then to the
key itself so a missing translation never breaks the UI.
"""

from wallpapergen.core.config import config

MESSAGES: dict[str, dict[str, str]] = {
    "ko": {
        "title": "AI 배경화면 생성기",
        "subtitle": "당신만의 특별한 휴대폰 배경화면을 만들어보세요",
        "prompt_label": "프롬프트",
        "prompt_placeholder": "예: '별이 빛나는 밤하늘 아래 숲'",
        "generate": "✨ 생성",
        "download": "다운로드",
        "remix": "리믹스",
        "close": "닫기",
        "empty_title": "어떤 분위기의 배경화면을 원하시나요?",
        "empty_hint": "위 입력창에 원하는 내용을 자유롭게 적어보세요.",
        "loader_title": "당신만의 배경화면을 만들고 있어요.",
        "loader_1": "AI가 붓을 들었습니다...",
        "loader_2": "색상을 조합하고 있어요...",
        "loader_3": "창의력을 발휘하는 중...",
        "loader_4": "거의 다 완성되었어요!",
        "unknown_error": "알 수 없는 오류가 발생했습니다.",
        "empty_prompt": "프롬프트를 입력해주세요.",
        "prompt_too_long": "프롬프트가 너무 깁니다 ({length}자). 최대 {max_length}자까지 입력할 수 있습니다.",
        "busy": "이미 배경화면을 생성하고 있어요. 잠시만 기다려주세요.",
        "no_images": "이미지가 생성되지 않았습니다. 다른 프롬프트로 다시 시도해보세요.",
        "invalid_key": "API 키가 유효하지 않습니다. 새 API 키를 입력해주세요.",
        "key_section": "API 키 설정",
        "key_label": "Gemini API 키",
        "key_placeholder": "AIza...",
        "key_save": "저장 및 확인",
        "key_test": "현재 키 확인",
        "key_clear": "저장된 키 삭제",
        "key_empty": "API 키를 입력해주세요.",
        "key_saved": "✅ API 키가 확인되어 저장되었습니다.",
        "key_valid": "✅ API 키가 정상적으로 작동합니다.",
        "key_cleared": "저장된 API 키를 삭제했습니다.",
        "key_nothing_to_clear": "저장된 API 키가 없습니다.",
        "key_source_stored": "🔑 저장된 API 키 사용 중: `{masked}`",
        "key_source_host": "🔑 환경에서 제공된 API 키 사용 중: `{masked}`",
        "key_source_none": "⚠️ API 키가 없습니다. 아래에 키를 입력해주세요.",
        "error_prefix": "❌ {message}",
    },
    "en": {
        "title": "AI Wallpaper Generator",
        "subtitle": "Create your own one-of-a-kind phone wallpaper",
        "prompt_label": "Prompt",
        "prompt_placeholder": "e.g. 'a forest under a starry night sky'",
        "generate": "✨ Generate",
        "download": "Download",
        "remix": "Remix",
        "close": "Close",
        "empty_title": "What kind of wallpaper would you like?",
        "empty_hint": "Describe it freely in the box above.",
        "loader_title": "Creating your wallpaper.",
        "loader_1": "The AI picked up its brush...",
        "loader_2": "Mixing the colours...",
        "loader_3": "Getting creative...",
        "loader_4": "Almost done!",
        "unknown_error": "An unknown error occurred.",
        "empty_prompt": "Please enter a prompt.",
        "prompt_too_long": "The prompt is too long ({length} characters). The maximum is {max_length}.",
        "busy": "A wallpaper is already being generated. Please wait.",
        "no_images": "No images were generated. Try a different prompt.",
        "invalid_key": "The API key is not valid. Please enter a new API key.",
        "key_section": "API key",
        "key_label": "Gemini API key",
        "key_placeholder": "AIza...",
        "key_save": "Save and verify",
        "key_test": "Check current key",
        "key_clear": "Delete stored key",
        "key_empty": "Please enter an API key.",
        "key_saved": "✅ The API key was verified and saved.",
        "key_valid": "✅ The API key works.",
        "key_cleared": "The stored API key was deleted.",
        "key_nothing_to_clear": "No API key is stored.",
        "key_source_stored": "🔑 Using stored API key: `{masked}`",
        "key_source_host": "🔑 Using API key from the environment: `{masked}`",
        "key_source_none": "⚠️ No API key. Please enter one below.",
        "error_prefix": "❌ {message}",
    },
}

LOADER_MESSAGE_KEYS = ("loader_1", "loader_2", "loader_3", "loader_4")


def get_message(key: str, locale: str | None = None, **fmt) -> str:
    """Look up a localized string and fill in any ``{placeholders}``."""
    locale = locale or config.locale
    table = MESSAGES.get(locale, MESSAGES["en"])
    text = table.get(key) or MESSAGES["en"].get(key) or key
    return text.format(**fmt) if fmt else text


def loader_messages(locale: str | None = None) -> list[str]:
    """The rotating status lines shown while a generation is running."""
    return [get_message(key, locale) for key in LOADER_MESSAGE_KEYS]


def format_error(error: BaseException | str | None, locale: str | None = None) -> str:
    """Turn an exception into a user-facing message.

    The error's own message is shown when it has one; otherwise the localized
    "unknown error" text is used.
    """
    message = str(error).strip() if error is not None else ""
    return message or get_message("unknown_error", locale)
