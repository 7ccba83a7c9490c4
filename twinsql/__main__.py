from .twinsql import main

main()
