from buildbar.cli import main

main()
