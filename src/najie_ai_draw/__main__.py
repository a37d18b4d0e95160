"""najie-ai-draw 入口点。

支持: python -m najie_ai_draw
"""

from .app import main

if __name__ == "__main__":
    main()
