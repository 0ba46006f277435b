from specsmith.cli.main import main

main()
