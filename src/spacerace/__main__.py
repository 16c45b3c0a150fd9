from spacerace.main import main

main()
