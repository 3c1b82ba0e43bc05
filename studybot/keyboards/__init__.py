from .builders import CALLBACK_PREFIX, build_choice_keyboard, build_files_keyboard, callback

__all__ = ["CALLBACK_PREFIX", "build_choice_keyboard", "build_files_keyboard", "callback"]
