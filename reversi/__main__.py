from reversi.main import main

main()
