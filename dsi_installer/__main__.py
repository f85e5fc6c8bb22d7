"""python -m dsi_installer"""

from dsi_installer.main import main

if __name__ == "__main__":
    main()
