from lceval.main import main

main()
