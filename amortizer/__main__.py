from amortizer.server import main

main()
