from chladni.app import main

main()
