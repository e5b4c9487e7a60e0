from snowflow.cli.main import main

main()
