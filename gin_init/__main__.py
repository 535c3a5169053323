from gin_init.cli import main

main()
