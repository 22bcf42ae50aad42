from walkpath.server import main

main()
