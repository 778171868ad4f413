from playmate.cli import main

main()
