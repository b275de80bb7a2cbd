from src.interfaces.cli.cli import main


main()
