# src/chip8_tracer/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
引数にYAML設定ファイルまたはROMファイルを1つ受け取り、メインウィンドウを起動します。
"""
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from PySide6.QtWidgets import QApplication

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import EmulatorConfig
from .main_window import MainWindow

# @intent:responsibility コマンドライン引数から設定と基準ディレクトリを決定します。
def resolve_config(args: List[str]) -> Tuple[EmulatorConfig, str]:
    if not args:
        return EmulatorConfig(), "."
    path = Path(args[0])
    if path.suffix.lower() in (".yaml", ".yml"):
        return ConfigLoader().load_from_file(str(path)), str(path.parent)
    return EmulatorConfig(rom=str(path.resolve())), "."

def main(argv: Optional[List[str]] = None):
    argv = sys.argv if argv is None else argv
    app = QApplication(argv)
    try:
        config, base_dir = resolve_config(argv[1:])
        main_win = MainWindow(config, base_dir)
    except (OSError, ValueError) as e:
        # ROM/設定の読み込み失敗は起動時の致命的エラー
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
