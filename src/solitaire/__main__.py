# src/solitaire/__main__.py

from solitaire.console.app import main

if __name__ == "__main__":
    main()
