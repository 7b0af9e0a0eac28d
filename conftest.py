import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("HEROES_SETTINGS_PATH", os.path.join(os.getcwd(), "_pytest_settings.toml"))
