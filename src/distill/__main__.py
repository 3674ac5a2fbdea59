from distill.main import main

main()
